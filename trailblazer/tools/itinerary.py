"""AI-generated day-by-day itineraries."""

import logging
import re
from datetime import date
from typing import Any, Optional, Union

from openai import AsyncOpenAI, RateLimitError

from trailblazer.tools.results import FetchResult

logger = logging.getLogger(__name__)

ITINERARY_FAILED = "Sorry, I couldn't generate an itinerary at this time."
ITINERARY_RATE_LIMITED = "Sorry, we've hit our AI request limit. Please try again later."
ITINERARY_NO_CREDENTIALS = "Itinerary generation is unavailable due to missing API credentials."

SYSTEM_PROMPT = "You are a skilled travel planner who writes clear, well-structured itineraries."

PROMPT_TEMPLATE = """Create a **detailed, well-structured** itinerary for **{city}, {country}** from **{start_date} to {end_date}**.

**Formatting Instructions:**
- Use a **bold header** for each day.
- Each day should include:
  - **Personalized Suggestions** based on the traveller's interests: **{interests}**.
  - **Morning Activity**: A must-visit attraction.
  - **Lunch Recommendation**: A popular local restaurant.
  - **Afternoon Activity**: A cultural experience or hidden gem.
  - **Dinner Spot**: A restaurant serving regional specialties.
  - **Evening Experience**: A fun or relaxing activity (e.g., night market, rooftop bar).

**Example Itinerary Format:**
---
**Day 1: Arrival & City Highlights**
- **Morning:** Visit [Landmark]
- **Lunch:** [Restaurant] - Known for [Special Dish]
- **Afternoon:** Explore [Unique Area]
- **Dinner:** [Restaurant] - Offers [Cuisine]
- **Evening:** [Night Activity]

---
**Day 2: Iconic Landmarks & Hidden Gems**
- **Morning:** Visit [Famous Site]
- **Lunch:** [Great Local Eatery] - Known for [Special Dish]
- **Afternoon:** Discover [Cultural Spot]
- **Dinner:** [Highly Rated Restaurant] - Offers [Cuisine]
- **Evening:** [Leisure or Social Experience]

**Ensure clear line breaks before each day's title for readability.**"""

SLOTS = ("Morning", "Lunch", "Afternoon", "Dinner", "Evening")

_SINGLE_EMPHASIS = re.compile(r"(?<![*\w])\*(?![*\s])([^*\n]+?)(?<![*\s])\*(?![*\w])")
_SLOT_LABEL = re.compile(r"\*\*(%s)\*\*\s*:" % "|".join(SLOTS))
_DAY_HEADER = re.compile(r"\s*(\*\*Day\b)")
_EXTRA_BLANK_LINES = re.compile(r"\n{3,}")

DateLike = Union[date, str]


def build_prompt(
    city: str, country: str, interests: Optional[str], start_date: DateLike, end_date: DateLike
) -> str:
    return PROMPT_TEMPLATE.format(
        city=city,
        country=country,
        interests=(interests or "").strip() or "general travel",
        start_date=start_date,
        end_date=end_date,
    )


def format_itinerary(text: str) -> str:
    """
    Normalize the model's markdown.

    - single-asterisk emphasis becomes bold
    - ``**Morning**:`` style labels become ``**Morning:**``
    - every ``**Day`` header starts after a blank line
    """
    text = _SINGLE_EMPHASIS.sub(r"**\1**", text.strip())
    text = _SLOT_LABEL.sub(r"**\1:**", text)
    text = _DAY_HEADER.sub(r"\n\n\1", text)
    text = _EXTRA_BLANK_LINES.sub("\n\n", text)
    return text.strip()


def _is_rate_limited(error: Exception) -> bool:
    if isinstance(error, RateLimitError):
        return True
    message = str(error).lower()
    return "quota" in message or "limit" in message


class ItineraryGenerator:
    """
    Generates itineraries with the OpenAI chat completions API.

    ``generate`` never raises: every failure is turned into one of the canned
    apology strings.
    """

    def __init__(
        self,
        api_key: Optional[str],
        model: str = "gpt-4o-mini",
        timeout: int = 30,
        client: Optional[Any] = None,
        temperature: float = 0.7,
    ):
        self.model = model
        self.temperature = temperature
        self.client = client
        if self.client is None and api_key:
            self.client = AsyncOpenAI(api_key=api_key, timeout=timeout)
        if self.client is None:
            logger.warning("OPENAI_API_KEY is missing. AI-generated itineraries will not work.")

    @property
    def available(self) -> bool:
        return self.client is not None

    async def generate(
        self,
        city: str,
        country: str,
        interests: Optional[str],
        start_date: DateLike,
        end_date: DateLike,
    ) -> FetchResult:
        if not self.available:
            return FetchResult.unavailable(ITINERARY_NO_CREDENTIALS, "missing credentials")

        prompt = build_prompt(city, country, interests, start_date, end_date)
        try:
            logger.info(f"Generating itinerary for {city}, {country}...")
            response = await self.client.chat.completions.create(
                model=self.model,
                temperature=self.temperature,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
            )
            content = response.choices[0].message.content if response.choices else None
            if not content or not content.strip():
                raise ValueError("Unexpected API response format.")

            return FetchResult.success(format_itinerary(content))

        except Exception as e:
            logger.error(
                f"Itinerary generation failed: city={city} country={country} "
                f"start={start_date} end={end_date} error={e}"
            )
            if _is_rate_limited(e):
                return FetchResult.unavailable(ITINERARY_RATE_LIMITED, str(e))
            return FetchResult.unavailable(ITINERARY_FAILED, str(e))

    async def close(self) -> None:
        if isinstance(self.client, AsyncOpenAI):
            await self.client.close()
