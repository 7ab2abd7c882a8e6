"""Prompt templates for the mock interview simulator.

The interview uses a single user prompt (no system message).  The first
template asks the opening question; the turn template evaluates the
candidate's previous answer and asks the next question, with fixed Markdown
conventions so the renderer can display it.
"""


def build_interview_start_prompt(job_title: str, job_description: str) -> str:
    """Prompt for the opening interview question."""
    return f"""You are an experienced interviewer conducting a mock interview for the position of "{job_title}".
Here is the job description: "{job_description}"

Ask the first relevant interview question tailored to the role's requirements.
Ensure the question is **professional**, *encouraging*, and clear.
Format the response in Markdown, using **bold** for emphasis (e.g., job title, key skills) and *italics* for a friendly tone. Avoid excessive Markdown symbols like code blocks.
Example:
**Interview Question**
*Thank you for joining us!* Please share your experience as a **{job_title}**..."""


def build_interview_turn_prompt(
    job_title: str,
    job_description: str,
    prior_response: str,
    question: str = "",
    conversation: str = "",
) -> str:
    """Prompt evaluating *prior_response* and asking the next question."""
    context = ""
    if conversation:
        context += f"\nInterview so far:\n{conversation}\n"
    if question:
        context += f'\nThe previous question was: "{question}"\n'

    return f"""You are an experienced interviewer conducting a mock interview for the position of "{job_title}".
Here is the job description: "{job_description}"
{context}
The candidate's response to the previous question is: "{prior_response}"

Evaluate the candidate's response and provide:
1. **Feedback**: Highlight **strengths** and **areas for improvement** using bullet points (-). Use *italics* for suggestions and emphasis on tone.
2. **Next Question**: Ask the next relevant interview question, building on the conversation and aligning with the job description. Use **bold** for the question title and *italics* for a friendly tone.

Format the response in **Markdown** with:
- **Bold** section headers (e.g., **Feedback**, **Next Question**) and key terms (e.g., **{job_title}**, **skills**).
- *Italics* for encouraging tone and suggestions (e.g., *quantify impact*).
- Bullet points (-) for feedback and numbered lists (1.) for multi-part questions.
- Horizontal rules (---) to separate sections.
- Avoid code blocks unless essential for technical terms.
- Clear, professional, and encouraging language.

Example:
**Feedback**
- **Strength**: Your experience as a **{job_title}** is relevant.
- **Improvement**: *Quantify* your impact for stronger answers.

---
**Next Question**
*Great response!* Can you describe..."""
