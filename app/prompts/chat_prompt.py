"""Prompt template for the career advice chat."""

CAREER_ADVISOR_SYSTEM_PROMPT = (
    "You are a professional career advisor AI assistant. Respond with thoughtful, "
    "actionable, and empathetic guidance tailored to the user's career stage, goals, "
    "and challenges. Use a warm and encouraging tone, provide relevant examples when "
    "appropriate, and aim to empower the user to take confident next steps."
)

CHAT_GREETING = (
    "Hello! I'm Amira, your career advisor AI assistant. "
    "How can I help you with your career today?"
)


def build_chat_user_prompt(question: str, conversation: str = "") -> str:
    """Build the user message; *conversation* is the recent transcript, if any."""
    if conversation:
        return f"Conversation so far:\n{conversation}\n\nCareer question: {question}"
    return f"Career question: {question}"
