from typing import List, Optional

from core.dto import CandidateDTO, JobDTO
from core.llm.schema_models import EXPERIENCE_LEVELS
from core.llm.system_prompts import CANDIDATE_EVALUATION_PROMPT_TEMPLATE

TRUNCATION_MARKER = "...(truncated)"
NO_ANSWER = "No answer provided"
NO_QUESTIONS = "No application questions."


def truncate_resume(resume_text: str, budget: int) -> str:
    if len(resume_text) <= budget:
        return resume_text
    return f"{resume_text[:budget]} {TRUNCATION_MARKER}"


def format_answers(candidate: CandidateDTO, job: JobDTO) -> str:
    """Render question/answer pairs in the job's question order."""
    answers = {}
    for a in candidate.answers:
        answers.setdefault(a.question_id, a.answer)

    blocks: List[str] = []
    for q in job.questions:
        answer = answers.get(q.id) or NO_ANSWER
        blocks.append(f"Q: {q.question}\nA: {answer}")
    return "\n\n".join(blocks)


def build_evaluation_prompt(
    candidate: CandidateDTO,
    job: JobDTO,
    resume_text: str,
    resume_percent: int,
    answers_percent: int,
    resume_char_budget: int = 5000,
    scoring_instructions: Optional[str] = None,
) -> str:
    instructions = ""
    if scoring_instructions and scoring_instructions.strip():
        instructions = f"\nADDITIONAL INSTRUCTIONS FROM RECRUITER:\n{scoring_instructions}\n"

    return CANDIDATE_EVALUATION_PROMPT_TEMPLATE.format(
        job_title=job.title,
        job_description=job.description,
        candidate_name=candidate.name,
        resume_text=truncate_resume(resume_text, resume_char_budget),
        answers_text=format_answers(candidate, job) or NO_QUESTIONS,
        resume_percent=resume_percent,
        answers_percent=answers_percent,
        recruiter_instructions=instructions,
        experience_levels=", ".join(f'"{level}"' for level in EXPERIENCE_LEVELS),
    )
