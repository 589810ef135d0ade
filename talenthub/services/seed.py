# talenthub/services/seed.py

import logging
import random
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from talenthub.core.config import Settings, settings as default_settings
from talenthub.schemas.assessment import (
    Assessment,
    AssessmentSection,
    LongTextQuestion,
    Question,
    SingleChoiceQuestion,
    ValidationRule,
    utcnow,
)
from talenthub.schemas.candidate import CANDIDATE_STAGES, Candidate, TimelineEvent
from talenthub.schemas.job import Job, slugify
from talenthub.schemas.score import AssessmentScore
from talenthub.services.store import LocalStore

logger = logging.getLogger(__name__)

JOB_TITLES = [
    "Senior Frontend Developer", "Backend Engineer", "Full Stack Developer",
    "DevOps Engineer", "Product Manager", "UX Designer", "Data Scientist",
    "Mobile Developer", "QA Engineer", "Technical Lead", "Software Architect",
    "Site Reliability Engineer", "Machine Learning Engineer", "Security Engineer",
    "Database Administrator", "Cloud Engineer", "Platform Engineer",
    "Engineering Manager", "Principal Engineer", "Staff Engineer",
    "Senior Backend Developer", "Junior Frontend Developer",
    "Lead Product Designer", "Senior Data Analyst", "Infrastructure Engineer",
]

TAGS = ["Remote", "London", "Berlin", "Toronto", "Full-time", "Contract", "Internship"]

FIRST_NAMES = ["Aarav", "Riya", "Karan", "Shreya", "Aditya", "Maya", "Noah", "Lena", "Omar", "Priya"]
LAST_NAMES = ["Kumar", "Singh", "Brown", "Pandey", "Raj", "Rai", "Hussain", "Meyer", "Costa", "Novak"]
EMAIL_DOMAINS = ["company.com", "gmail.com", "tech.io"]

ASSESSMENT_TITLES = ["Technical Skills Assessment", "Problem Solving Evaluation", "System Design Challenge"]

TECHNICAL_PROMPTS = [
    "What is your experience with modern web frameworks?",
    "Explain the difference between SQL and NoSQL databases.",
    "How comfortable are you debugging production issues?",
    "Describe your experience with version control systems like Git.",
    "How would you rate your testing practice?",
]
PROBLEM_SOLVING_PROMPTS = [
    "Describe a challenging technical problem you solved recently.",
    "How do you prioritize tasks when working on multiple projects?",
    "Walk us through your approach to learning new technologies.",
]
SYSTEM_DESIGN_PROMPTS = [
    "Design a scalable chat application architecture.",
    "How would you design a URL shortening service?",
]
LEVELS = ["Beginner", "Intermediate", "Advanced", "Expert"]

SCORE_COUNT = 50


def _days_ago(rng: random.Random, now: datetime, days: int) -> datetime:
    return now - timedelta(seconds=rng.uniform(0, days * 24 * 3600))


# ------------------------------------------------------------
# Builders
# ------------------------------------------------------------

def _build_jobs(rng: random.Random, now: datetime) -> List[Job]:
    jobs = []
    for i, title in enumerate(JOB_TITLES):
        jobs.append(Job(
            id=f"job-{i + 1}",
            title=title,
            slug=slugify(title),
            description=f"Join our team as a {title} and help us build the future of hiring.",
            responsibilities=[
                "Design and deliver scalable solutions",
                "Collaborate with cross-functional teams",
                "Review code and mentor teammates",
            ],
            qualifications=[
                f"3+ years of {'senior-level' if 'Senior' in title else 'professional'} experience",
                "Strong problem-solving skills",
            ],
            status="archived" if rng.random() > 0.7 else "active",
            tags=rng.sample(TAGS, rng.randint(1, 3)),
            created_at=_days_ago(rng, now, 90),
            updated_at=_days_ago(rng, now, 30),
            order=i,
        ))
    return jobs


def _build_candidates(rng: random.Random, now: datetime, jobs: List[Job], count: int) -> List[Candidate]:
    candidates = []
    for i in range(count):
        first, last = rng.choice(FIRST_NAMES), rng.choice(LAST_NAMES)
        created_at = _days_ago(rng, now, 120)
        candidates.append(Candidate(
            id=f"candidate-{i + 1}",
            name=f"{first} {last}",
            email=f"{first.lower()}.{last.lower()}{i}@{rng.choice(EMAIL_DOMAINS)}",
            phone=f"+1-555-{rng.randint(0, 9999):04d}" if rng.random() > 0.3 else None,
            current_stage=rng.choice(CANDIDATE_STAGES),
            job_id=rng.choice(jobs).id,
            created_at=created_at,
            updated_at=_days_ago(rng, now, 60),
            timeline=[TimelineEvent(
                id=f"timeline-{i + 1}-1",
                type="stage_change",
                description="Application submitted",
                created_at=created_at,
            )],
        ))
    return candidates


def _long_text(
    qid: str, prompt: str, order: int, min_length: int, max_length: int, required: bool = True,
) -> LongTextQuestion:
    return LongTextQuestion(
        id=qid,
        question=prompt,
        required=required,
        validation=ValidationRule(min_length=min_length, max_length=max_length),
        order=order,
    )


def _build_assessment(index: int, job: Job, settings: Settings, rng: random.Random, now: datetime) -> Assessment:
    n = index + 1
    technical: List[Question] = []
    for j, prompt in enumerate(TECHNICAL_PROMPTS):
        qid = f"question-{n}-1-{j + 1}"
        if j % 2 == 0:
            technical.append(SingleChoiceQuestion(
                id=qid, question=prompt, required=j < 3, options=list(LEVELS), order=j,
            ))
        else:
            technical.append(_long_text(qid, prompt, j, 50, 500, required=j < 3))

    assessment_id = f"assessment-{n}"
    return Assessment(
        id=assessment_id,
        title=ASSESSMENT_TITLES[index],
        job_id=job.id,
        sections=[
            AssessmentSection(id=f"section-{n}-1", title="Technical Knowledge", order=0, questions=technical),
            AssessmentSection(
                id=f"section-{n}-2", title="Problem Solving", order=1,
                questions=[
                    _long_text(f"question-{n}-2-{j + 1}", p, j, 100, 1000)
                    for j, p in enumerate(PROBLEM_SOLVING_PROMPTS)
                ],
            ),
            AssessmentSection(
                id=f"section-{n}-3", title="System Design", order=2,
                questions=[
                    _long_text(f"question-{n}-3-{j + 1}", p, j, 200, 2000)
                    for j, p in enumerate(SYSTEM_DESIGN_PROMPTS)
                ],
            ),
        ],
        shareable_link=settings.shareable_link(assessment_id),
        is_active=True,
        created_at=_days_ago(rng, now, 60),
        updated_at=_days_ago(rng, now, 30),
    )


def _build_scores(
    rng: random.Random,
    now: datetime,
    assessments: List[Assessment],
    candidates: List[Candidate],
) -> List[AssessmentScore]:
    # Only the first hundred candidates have results
    pool = candidates[:100]
    if not pool:
        return []

    scores = []
    for i in range(SCORE_COUNT):
        value = float(rng.randint(60, 99))
        scores.append(AssessmentScore(
            id=f"score-{i + 1}",
            assessment_id=rng.choice(assessments).id,
            candidate_id=rng.choice(pool).id,
            score=value,
            max_score=100.0,
            percentage=value,
            completed_at=_days_ago(rng, now, 30),
        ))
    return scores


# ------------------------------------------------------------
# Entry points
# ------------------------------------------------------------

def seed_database(
    store: LocalStore,
    rng: Optional[random.Random] = None,
    settings: Optional[Settings] = None,
    candidate_count: Optional[int] = None,
    now: Optional[datetime] = None,
) -> Dict[str, int]:
    """
    Fill an empty store with demo data.

    Does nothing (returns zero counts) when jobs already exist, so calling it
    twice never duplicates data.
    """
    if store.jobs.count() > 0:
        logger.info("Store already seeded, skipping")
        return {name: 0 for name in store.collections()}

    settings = settings or default_settings
    rng = rng or random.Random()
    now = now or utcnow()
    if candidate_count is None:
        candidate_count = settings.SEED_CANDIDATE_COUNT

    logger.info("Seeding store with sample data...")
    jobs = _build_jobs(rng, now)
    candidates = _build_candidates(rng, now, jobs, candidate_count)
    assessments = [
        _build_assessment(i, jobs[i], settings, rng, now) for i in range(len(ASSESSMENT_TITLES))
    ]
    scores = _build_scores(rng, now, assessments, candidates)

    counts = {
        "jobs": store.jobs.bulk_insert(jobs),
        "candidates": store.candidates.bulk_insert(candidates),
        "assessments": store.assessments.bulk_insert(assessments),
        "assessmentScores": store.assessment_scores.bulk_insert(scores),
    }
    logger.info(f"Store seeded: {counts}")
    return counts


def restore_application_state(
    store: LocalStore,
    seed: bool = True,
    **seed_options,
) -> Dict[str, int]:
    """
    Current collection counts, seeding first when the store holds no jobs,
    candidates or assessments.
    """
    counts = store.counts()
    is_empty = not (counts["jobs"] or counts["candidates"] or counts["assessments"])

    if is_empty and seed:
        logger.info("No existing data found, seeding store...")
        seed_database(store, **seed_options)
        counts = store.counts()
    else:
        logger.info(
            f"Restored application state: {counts['jobs']} jobs, "
            f"{counts['candidates']} candidates, {counts['assessments']} assessments"
        )
    return counts
