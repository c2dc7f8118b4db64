"""Rule-based answers used whenever the AI provider is unavailable.

Each builder returns the same pydantic shapes the AI path is validated
against, so handlers never need to know which path produced a payload.
"""
from __future__ import annotations

import re
from typing import Sequence

from careercoach.schemas.coach import CareerCoachRequest, MockInterviewRequest, ResumeAnalysisRequest
from careercoach.schemas.recommendation import CareerRecommendation, InterviewQuestion, ResumeAnalysis


INTERVIEW_QUESTION_COUNT = 5


_CHAT_OPENERS = {
    "general": "Here is some guidance while our AI coach is catching its breath.",
    "interview": "Let's get you interview-ready.",
    "resume": "A few resume improvements make a big difference.",
    "learning_path": "Let's map out how you can learn this step by step.",
}

_CHAT_TIPS = {
    "general": [
        "List the activities and subjects you enjoy most; they point to the fields where you will keep growing.",
        "Pick one target role and read five real job descriptions to see which skills keep repeating.",
        "Build one small project that shows those skills, and share it on GitHub or LinkedIn.",
    ],
    "interview": [
        "Prepare three stories using the STAR method (Situation, Task, Action, Result).",
        "Research the company's products and recent news before the interview.",
        "Practice explaining your projects out loud in under two minutes each.",
    ],
    "resume": [
        "Start every bullet with an action verb and add a number wherever you can.",
        "Mirror the keywords from the job description so applicant tracking systems pick you up.",
        "Keep it to one page for entry-level roles and put your strongest section first.",
    ],
    "learning_path": [
        "Split your goal into monthly milestones with one concrete project each.",
        "Combine one structured course with hands-on practice every week.",
        "Join a community where you can ask questions and review other people's work.",
    ],
}


def build_chat_reply(
    request: CareerCoachRequest,
    recommendations: Sequence[CareerRecommendation] = (),
) -> str:
    mode = request.coaching_type
    lines = [_CHAT_OPENERS.get(mode, _CHAT_OPENERS["general"])]

    profile = request.user_profile
    if profile is not None and profile.current_role:
        lines.append(f"As someone working as {profile.current_role}, focus on building on what you already do well.")
    if profile is not None and profile.goals:
        lines.append(f"Keeping your goal of {profile.goals[0]} in mind:")

    for idx, tip in enumerate(_CHAT_TIPS.get(mode, _CHAT_TIPS["general"]), start=1):
        lines.append(f"{idx}. {tip}")

    if recommendations:
        titles = ", ".join(r.title for r in recommendations)
        lines.append(f"Based on what you shared, careers worth exploring include: {titles}.")

    lines.append("Ask me a follow-up question any time and I'll go deeper.")
    return "\n".join(lines)


# (question template, tips) by interview type and difficulty. `{role}` is substituted.
_QUESTION_BANK: dict[str, dict[str, list[tuple[str, str]]]] = {
    "technical": {
        "beginner": [
            ("Walk me through a project where you used the core tools of a {role}.", "Focus on what you built and why you chose those tools."),
            ("How do you debug a problem you have never seen before?", "Describe a repeatable process: reproduce, isolate, fix, verify."),
            ("What is the difference between a list and a dictionary (or map)? When would you use each?", "Mention lookup cost and ordering."),
            ("How do you use version control in your daily work?", "Cover branching, commits and pull requests."),
            ("Explain a technical concept from your field to a non-technical person.", "Use an analogy and check for understanding."),
        ],
        "intermediate": [
            ("Describe the architecture of the most complex system you have worked on as a {role}.", "Draw boundaries between components and explain data flow."),
            ("How would you find and fix a performance bottleneck in production?", "Talk about measuring first: profiling, metrics, logs."),
            ("How do you design an API that other teams will depend on?", "Cover versioning, error handling and documentation."),
            ("What is your approach to testing? Where do unit tests stop being enough?", "Mention integration and end-to-end tests and their trade-offs."),
            ("Tell me about a time you had to make a trade-off between speed and code quality.", "Explain the context, the decision and what you learned."),
            ("How do you handle concurrency or race conditions in the systems you build?", "Give a concrete example and the fix."),
        ],
        "advanced": [
            ("How would you evolve a {role}'s core system to handle 100x more traffic?", "Identify bottlenecks, then discuss caching, sharding and async work."),
            ("Describe a production incident you led. What changed afterwards?", "Cover detection, mitigation, root cause and follow-ups."),
            ("How do you decide when to rewrite versus refactor a large codebase?", "Discuss risk, incremental migration and measurable goals."),
            ("How do you ensure consistency across services that each own their data?", "Mention idempotency, retries and eventual consistency."),
            ("What technical standards would you introduce to a growing team?", "Balance autonomy with code review, CI and observability."),
        ],
    },
    "behavioral": {
        "beginner": [
            ("Tell me about yourself and why you want to be a {role}.", "Keep it to two minutes: past, present, future."),
            ("Describe a time you worked in a team to finish a project.", "Use STAR and highlight your own contribution."),
            ("How do you handle feedback you disagree with?", "Show openness and a concrete example."),
            ("Tell me about a mistake you made and how you fixed it.", "Own the mistake and focus on the learning."),
            ("How do you manage your time when you have several deadlines?", "Describe a prioritisation method you actually use."),
        ],
        "intermediate": [
            ("Tell me about a conflict with a teammate and how you resolved it.", "Stay neutral and focus on the outcome."),
            ("Describe a time you influenced a decision without formal authority.", "Show data, empathy and persistence."),
            ("Tell me about a project that failed. What would you do differently?", "Be honest and specific."),
            ("How have you helped a colleague grow?", "Give an example of mentoring or knowledge sharing."),
            ("Describe a time you had to learn something quickly to deliver.", "Show your learning strategy."),
        ],
        "advanced": [
            ("Tell me about a time you changed the direction of a team or product.", "Explain how you built consensus."),
            ("How do you handle an underperforming team member?", "Cover expectations, support and follow-through."),
            ("Describe the hardest prioritisation call you have made as a {role}.", "Show the trade-offs and stakeholders involved."),
            ("How do you build trust with a new team?", "Mention listening first and early wins."),
            ("Tell me about a time you disagreed with leadership.", "Show respectful escalation and commitment once decided."),
        ],
    },
    "system_design": {
        "beginner": [
            ("Design a URL shortener.", "Start with requirements, then storage and the ID scheme."),
            ("Design a to-do list application with sync across devices.", "Discuss the data model and conflict handling."),
            ("How would you design a simple rate limiter?", "Compare fixed window and token bucket."),
            ("Design the backend for a blog with comments.", "Cover the schema, pagination and caching."),
            ("How would you store and serve user profile pictures?", "Mention object storage and a CDN."),
        ],
        "intermediate": [
            ("Design a notification service that sends email, SMS and push messages.", "Use queues and retries; think about user preferences."),
            ("Design a news feed for a social app.", "Compare fan-out on write and fan-out on read."),
            ("Design a job scheduler that runs millions of tasks per day.", "Discuss partitioning, leases and idempotency."),
            ("Design a search autocomplete system.", "Talk about tries, ranking and caching."),
            ("Design a chat application.", "Cover connections, message ordering and storage."),
        ],
        "advanced": [
            ("Design a globally distributed key-value store.", "Cover replication, consistency and partition handling."),
            ("Design a payment processing system.", "Focus on idempotency, ledgers and reconciliation."),
            ("Design a video streaming platform.", "Discuss encoding, CDNs and adaptive bitrate."),
            ("Design a real-time analytics pipeline.", "Compare stream and batch processing and late data."),
            ("Design a multi-tenant SaaS platform a {role} would own.", "Cover isolation, noisy neighbours and billing."),
        ],
    },
    "hr": {
        "beginner": [
            ("Why are you interested in this {role} position?", "Link your motivation to the company's mission."),
            ("Where do you see yourself in three years?", "Show ambition that fits the role."),
            ("What are your greatest strengths and weaknesses?", "Pick a real weakness and show how you are improving."),
            ("Why should we hire you?", "Summarise your fit in three points."),
            ("Do you have any questions for us?", "Always prepare two or three thoughtful questions."),
        ],
        "intermediate": [
            ("What are your salary expectations for this {role} role?", "Research market ranges and give a band."),
            ("Why are you leaving your current job?", "Stay positive and forward-looking."),
            ("What kind of work environment helps you do your best work?", "Be honest and relate it to the company."),
            ("How do you stay motivated on repetitive tasks?", "Give a concrete habit or example."),
            ("What would your previous manager say about you?", "Use real feedback you have received."),
        ],
        "advanced": [
            ("How would you describe your leadership style?", "Give examples rather than adjectives."),
            ("What would you achieve in your first 90 days as a {role}?", "Structure it as listen, plan, deliver."),
            ("How do you balance team wellbeing with delivery pressure?", "Show you protect the team while meeting commitments."),
            ("What is the most important thing you look for in an employer?", "Connect it to this company."),
            ("How do you handle negotiation on offers and responsibilities?", "Show preparation and a win-win mindset."),
        ],
    },
}

_DIFFICULTY_ORDER = ("beginner", "intermediate", "advanced")


def build_interview_questions(request: MockInterviewRequest) -> list[InterviewQuestion]:
    bank = _QUESTION_BANK.get(request.interview_type, _QUESTION_BANK["technical"])
    asked = {" ".join(q.lower().split()) for q in request.previous_questions}

    # Requested difficulty first, then neighbouring tiers if previous questions exhausted it.
    order = [request.difficulty] + [d for d in _DIFFICULTY_ORDER if d != request.difficulty]
    questions: list[InterviewQuestion] = []
    for difficulty in order:
        for template, tip in bank.get(difficulty, []):
            text = template.format(role=request.role)
            if " ".join(text.lower().split()) in asked:
                continue
            questions.append(
                InterviewQuestion(
                    question=text,
                    category=request.interview_type,
                    difficulty=difficulty,
                    tips=[tip],
                    follow_ups=["Can you give a concrete example?", "What would you do differently next time?"],
                )
            )
            if len(questions) >= INTERVIEW_QUESTION_COUNT:
                return questions

    if not questions:
        # Every bank question was already asked; recycle the requested tier.
        for template, tip in bank.get(request.difficulty, [])[:INTERVIEW_QUESTION_COUNT]:
            questions.append(
                InterviewQuestion(
                    question=template.format(role=request.role),
                    category=request.interview_type,
                    difficulty=request.difficulty,
                    tips=[tip],
                )
            )
    return questions


_SECTION_PATTERNS = {
    "contact": re.compile(r"@|\blinkedin\b|\bphone\b|\+?\d[\d\s-]{8,}\d"),
    "education": re.compile(r"\b(education|university|college|degree|b\.?tech|bachelor|master|school)\b"),
    "experience": re.compile(r"\b(experience|intern(ship)?|worked|employment|company)\b"),
    "skills": re.compile(r"\b(skills|technologies|tools|proficient)\b"),
    "projects": re.compile(r"\b(projects?|built|developed|github)\b"),
}

_ACTION_VERBS = (
    "led", "built", "developed", "designed", "implemented", "improved", "created", "launched",
    "managed", "optimized", "optimised", "reduced", "increased", "delivered", "automated", "analyzed",
)

_STOPWORDS = frozenset(
    "a an and are as at be by for from has have in is it of on or our the to we will with you your "
    "this that who what role team work years year experience strong ability skills".split()
)

_WORD_RE = re.compile(r"[a-z][a-z0-9+#.]{2,}")


def _keywords(text: str, limit: int = 15) -> list[str]:
    counts: dict[str, int] = {}
    for word in _WORD_RE.findall(text.lower()):
        word = word.rstrip(".")
        if word in _STOPWORDS or len(word) < 3:
            continue
        counts[word] = counts.get(word, 0) + 1
    ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    return [word for word, _ in ranked[:limit]]


def build_resume_analysis(request: ResumeAnalysisRequest) -> ResumeAnalysis:
    text = request.resume_text
    lowered = text.lower()
    sections = {name: bool(pattern.search(lowered)) for name, pattern in _SECTION_PATTERNS.items()}
    verbs = [v for v in _ACTION_VERBS if re.search(rf"\b{v}\b", lowered)]
    quantified = len(re.findall(r"\d+(\.\d+)?\s*(%|percent|\+|x\b|k\b|users|customers|hours)", lowered))
    word_count = len(text.split())

    target_text = " ".join(filter(None, [request.target_role, request.job_description]))
    target_keywords = _keywords(target_text) if target_text else []
    missing_keywords = [kw for kw in target_keywords if kw not in lowered]
    coverage = 1.0 if not target_keywords else (len(target_keywords) - len(missing_keywords)) / len(target_keywords)

    section_score = sum(sections.values()) / len(sections)
    length_score = 1.0 if 250 <= word_count <= 800 else 0.7 if word_count >= 120 else 0.4
    verb_score = min(1.0, len(verbs) / 5)
    metric_score = min(1.0, quantified / 3)

    overall = round(100 * (0.35 * section_score + 0.15 * length_score + 0.2 * verb_score + 0.15 * metric_score + 0.15 * coverage))
    ats = round(100 * (0.5 * section_score + 0.5 * coverage))

    strengths: list[str] = []
    improvements: list[str] = []
    if section_score >= 0.8:
        strengths.append("Covers the standard resume sections recruiters expect")
    else:
        missing = [name for name, present in sections.items() if not present]
        improvements.append(f"Add clearly labelled sections for: {', '.join(missing)}")
    if len(verbs) >= 3:
        strengths.append("Uses strong action verbs")
    else:
        improvements.append("Start bullet points with action verbs such as built, led or improved")
    if quantified >= 2:
        strengths.append("Quantifies achievements with numbers")
    else:
        improvements.append("Add metrics to show impact (e.g. 'reduced load time by 30%')")
    if target_keywords and coverage >= 0.6:
        strengths.append("Good keyword alignment with the target role")
    elif target_keywords:
        improvements.append("Tailor the wording to the job description to pass ATS filters")
    if word_count < 120:
        improvements.append("Expand the resume with more detail on projects and experience")
    elif word_count > 800:
        improvements.append("Trim the resume; aim for one page for early-career roles")

    feedback = {
        "header": "Contact details found." if sections["contact"] else "Add email, phone and a LinkedIn or GitHub link.",
        "education": "Education is present." if sections["education"] else "Add your degree, institution and graduation year.",
        "experience": "Experience is present; make sure each bullet shows impact."
        if sections["experience"]
        else "Add internships, freelance work or relevant roles.",
        "skills": "Skills are listed; group them by category." if sections["skills"] else "Add a dedicated skills section.",
        "projects": "Projects are present; mention the technologies used."
        if sections["projects"]
        else "Add two or three projects with links.",
    }

    role = request.target_role or "your target role"
    return ResumeAnalysis(
        overall_score=overall,
        ats_compatibility=ats,
        summary=f"Heuristic review against {role}: {sum(sections.values())}/{len(sections)} key sections detected.",
        strengths=strengths or ["Resume text is readable and parseable"],
        areas_for_improvement=improvements,
        section_feedback=feedback,
        formatting_suggestions=[
            "Use consistent bullet formatting",
            "Keep fonts and headings uniform",
            "Export as a text-based PDF so ATS can read it",
        ],
        content_suggestions=[
            "Lead with your most relevant experience for the role",
            "Describe outcomes, not just responsibilities",
        ],
        keywords_to_add=missing_keywords[:10],
    )
