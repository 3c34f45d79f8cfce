FATIGUE_LABELS = ["Very Bad", "Bad", "Okay", "Good", "Very Good"]

NO_DATA_MESSAGE = "No data found for the specified period. Please record some entries first."
ANALYSIS_FALLBACK = "Unable to generate analysis"
CHAT_FALLBACK = "Sorry, I cannot generate a response"


def fatigue_label(fatigue: int) -> str:
    if 1 <= fatigue <= len(FATIGUE_LABELS):
        return FATIGUE_LABELS[fatigue - 1]
    return str(fatigue)


def analysis_system_prompt() -> str:
    return (
        "You are an empathetic counselor who specializes in emotional analysis. "
        "Understand user emotions and provide constructive advice."
    )


def analysis_user_prompt(records_block: str) -> str:
    return f"""
Here is the user's condition data:
{records_block}

Please provide a comprehensive analysis including:
1. Overall patterns
2. Notable changes or trends
3. Suggestions for improvement

Use a warm and friendly tone, summarize in 3-4 sentences.
""".strip()


def chat_system_prompt() -> str:
    return (
        "You are an AI assistant specializing in emotional care. "
        "Show empathy and engage warmly with users. "
        "Provide advice on emotional recording, stress management, and mental health."
    )
