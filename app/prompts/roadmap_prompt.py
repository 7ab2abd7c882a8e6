"""Prompt template for the skills roadmap."""

ROADMAP_SYSTEM_PROMPT = (
    "You are a career development AI assistant. Based on the provided professional "
    "profile and target role, create a detailed skills roadmap with learning "
    "resources and milestones."
)

NOT_SPECIFIED = "Not specified"


def build_roadmap_user_prompt(
    target_role: str,
    experience: str,
    name: str = "",
    education: str = "",
    skills: str = "",
    goals: str = "",
) -> str:
    """Build the user message embedding the candidate's profile block."""
    profile_text = "\n".join([
        f"Name: {name or NOT_SPECIFIED}",
        f"Education: {education or NOT_SPECIFIED}",
        f"Experience: {experience or NOT_SPECIFIED}",
        f"Skills: {skills or NOT_SPECIFIED}",
        f"Career Goals: {goals or NOT_SPECIFIED}",
        f"Target Role: {target_role or NOT_SPECIFIED}",
    ])
    return f"Profile:\n{profile_text}\n\nGenerate a skills roadmap for the target role."
