import logging

from soulchat.models.search import SearchOutcome
from soulchat.services.intent import DEFAULT_VERDICT, match_rule
from soulchat.services.search_gateway import SearchGateway

logger = logging.getLogger(__name__)

WEATHER_FALLBACK = (
    "I tried to search for weather information, but couldn't access real-time data "
    "at the moment. You can check a weather service like weather.com for current forecasts."
)
NEWS_FALLBACK = (
    "I tried to search for news, but couldn't access the latest headlines at the moment. "
    "You can check news websites for the most current information."
)
SEARCH_FAILED_FALLBACK = (
    "I tried to search the internet for information about your question, but encountered "
    "an issue: {error}. Could you try rephrasing your question?"
)
DEFAULT_SEARCH_ERROR = "couldn't find relevant information"

NOT_ENOUGH_INFO_REPLY = (
    "I'm not sure I have enough information about that. Try asking a question with search "
    "terms like 'search for...' or 'find information about...' so I can look up the latest "
    "information for you."
)

# (substrings, reply); checked in order, first hit wins.
LOCAL_REPLIES = (
    (
        ("how are you",),
        "I'm functioning well, thank you for asking! I'm here to assist you with "
        "information and conversations. How can I help you today?",
    ),
    (
        ("hello", "hi "),
        "Hello! It's nice to chat with you. How can I assist you today?",
    ),
    (
        ("thank",),
        "You're welcome! I'm happy to help. Is there anything else you'd like to know?",
    ),
    (
        ("your name",),
        "I'm an AI assistant built to help answer your questions and provide information. "
        "Is there something specific you'd like to know about?",
    ),
    (
        ("what can you help", "what can you do"),
        "I can help you with a variety of tasks including:\n\n"
        "• Answering questions about almost any topic\n"
        "• Searching the internet for current information\n"
        "• Finding recipes and cooking instructions\n"
        "• Providing weather information\n"
        "• Offering recommendations for books, movies, etc.\n"
        "• Explaining concepts or ideas\n\n"
        "Try asking me something specific, and I'll do my best to help!",
    ),
)


def fallback_reply(message: str, error_message: str | None) -> str:
    """Reply used when a search was wanted but produced nothing."""
    text = message.lower()
    if "weather" in text:
        return WEATHER_FALLBACK
    if "news" in text:
        return NEWS_FALLBACK
    return SEARCH_FAILED_FALLBACK.format(error=error_message or DEFAULT_SEARCH_ERROR)


def local_reply(message: str) -> str:
    text = message.lower()
    for needles, reply in LOCAL_REPLIES:
        if any(n in text for n in needles):
            return reply
        # A lone "hi" has no trailing space to match the "hi " needle.
        if "hi " in needles and text.strip() == "hi":
            return reply
    return NOT_ENOUGH_INFO_REPLY


class ResponseSynthesizer:
    def __init__(self, gateway: SearchGateway):
        self.gateway = gateway

    async def synthesize(self, message: str) -> str:
        rule = match_rule(message)
        should_search = rule.search if rule is not None else DEFAULT_VERDICT
        logger.info(
            "Message %r - should search: %s (rule=%s)",
            message, should_search, rule.name if rule else "default",
        )

        if not should_search:
            return local_reply(message)

        try:
            outcome = await self.gateway.search(message)
        except Exception:
            logger.warning("Search failed unexpectedly, using fallback reply", exc_info=True)
            outcome = SearchOutcome(
                success=False,
                error_message="An unexpected error occurred during search",
            )

        if outcome.success and outcome.result_text:
            return outcome.result_text
        logger.info("Search unavailable for %r: %s", message, outcome.error_message)
        return fallback_reply(message, outcome.error_message)
