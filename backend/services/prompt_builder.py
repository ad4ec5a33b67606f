"""Prompt template for the CV / job description compatibility call."""

EVALUATION_DIMENSIONS = (
    "Technical skills alignment",
    "Experience relevance",
    "Cultural fit indicators",
    "Education/certification match",
    "Soft skills assessment",
    "Growth potential",
)


def build_analysis_prompt(cv_text: str, job_description: str) -> str:
    """Embed both documents and the exact JSON shape the model must return.

    Deterministic: the same inputs always produce the same prompt.
    """
    focus = "\n".join(f"- {dimension}" for dimension in EVALUATION_DIMENSIONS)

    return f"""Analyze the following CV against the job description and provide a comprehensive evaluation.

JOB DESCRIPTION:
{job_description}

CANDIDATE CV:
{cv_text}

Please provide your analysis in the following JSON format (ensure valid JSON):

{{
  "overallMatch": <number between 0-100>,
  "strengths": [<array of candidate's key strengths relevant to the role>],
  "weaknesses": [<array of areas where candidate may be lacking>],
  "recommendations": [<array of suggestions for improving the match>],
  "keyAlignments": [<array of specific ways the candidate aligns with job requirements>],
  "missingSkills": [<array of required skills the candidate appears to lack>],
  "summary": "<brief overall assessment paragraph>"
}}

Focus on:
{focus}

Provide specific, actionable insights rather than generic statements.
"""
