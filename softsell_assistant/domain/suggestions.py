from typing import Tuple

SUGGESTED_QUESTIONS: Tuple[str, ...] = (
    "How do I sell my software license?",
    "What types of licenses can I sell?",
    "How much is my license worth?",
    "Is selling my license legal?",
)
