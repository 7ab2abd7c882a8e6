"""Prompt templates for the scored features: CV analysis and job match.

Both system prompts pin the "ATS Score: X%" marker so the score extractor
can find it.
"""

CV_ANALYSIS_SYSTEM_PROMPT = (
    "You are a CV analyzer that provides concise, actionable feedback. "
    "Your response MUST include an 'ATS Score: X%' on a line by itself"
)

JOB_MATCH_SYSTEM_PROMPT = (
    "You are an AI job match analyzer. Compare the CV and job description, then "
    "provide a concise match analysis with a percentage score (0-100%) and 2-3 "
    "specific improvement suggestions. Format the score as 'ATS Score: X%'."
)


def build_cv_analysis_user_prompt(role: str, cv_text: str, cover_letter_text: str = "") -> str:
    """Build the user message for a CV / cover letter analysis."""
    combined = f"Role: {role}\n\nCV:\n{cv_text}"
    if cover_letter_text:
        combined += f"\n\nCover Letter:\n{cover_letter_text}"

    return f"""Analyze this CV/resume for job fit and ATS optimization. Be brief but specific.

1. Give an ATS Score (0-100%)
2. List 3-5 key strengths
3. List 3-5 improvement suggestions
4. Mention 2-3 keywords missing for ATS

CV content:
{combined}"""


def build_job_match_user_prompt(cv_text: str, job_description_text: str) -> str:
    """Build the user message comparing a CV with a job description."""
    return f"CV: {cv_text}\nJob Description: {job_description_text}"
