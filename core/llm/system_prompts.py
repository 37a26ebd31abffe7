CANDIDATE_EVALUATION_SYSTEM_PROMPT = "You are an expert recruiter. Respond only with valid JSON."

CANDIDATE_EVALUATION_PROMPT_TEMPLATE = """You are an expert recruiter evaluating a job candidate. Analyze the following information and provide a detailed evaluation.

JOB TITLE: {job_title}

JOB DESCRIPTION:
{job_description}

CANDIDATE NAME: {candidate_name}

RESUME:
{resume_text}

APPLICATION ANSWERS:
{answers_text}

EVALUATION WEIGHTS:
- Resume evaluation weight: {resume_percent}%
- Application answers weight: {answers_percent}%
{recruiter_instructions}
Please evaluate this candidate and provide:
1. resume_rating: A score from 1-5 rating the quality and relevance of the resume (if the resume could not be read, use 3 and explain in resume_summary)
2. answer_quality_rating: A score from 1-5 rating the quality of their application answers
3. resume_summary: A brief 2-3 sentence summary. If the resume text was not available or could not be parsed, say that the resume could not be read automatically and that the evaluation is based on the application answers, then briefly summarize what you can infer from the answers.
4. experience_level: One of: {experience_levels} (if unknown, infer from answers or use "Unknown")

IMPORTANT: Consider the evaluation weights when assessing the candidate. If the resume could not be read, base your evaluation primarily on the application answers and do not penalize the candidate for the parsing issue.

Respond in JSON format only:
{{
  "resume_rating": <number 1-5>,
  "answer_quality_rating": <number 1-5>,
  "resume_summary": "<string>",
  "experience_level": "<string>"
}}"""
