"""
JSON schemas for structured LLM responses.
"""

EXPERIENCE_LEVELS = ["Entry Level", "Junior", "Mid-Level", "Senior", "Lead", "Executive"]
UNKNOWN_EXPERIENCE_LEVEL = "Unknown"

CANDIDATE_EVALUATION_SCHEMA = {
    "name": "candidate_evaluation",
    "strict": True,
    "schema": {
        "type": "object",
        "properties": {
            "resume_rating": {"type": "integer", "minimum": 1, "maximum": 5},
            "answer_quality_rating": {"type": "integer", "minimum": 1, "maximum": 5},
            "resume_summary": {"type": "string"},
            "experience_level": {
                "type": "string",
                "enum": EXPERIENCE_LEVELS + [UNKNOWN_EXPERIENCE_LEVEL],
            },
        },
        "required": ["resume_rating", "answer_quality_rating", "resume_summary", "experience_level"],
        "additionalProperties": False,
    },
}
