"""
LLM service for product recommendations via the OpenAI chat completions API
"""
import asyncio
import json
import logging
import time
from datetime import datetime
from typing import Any, Dict, List, Optional

import openai

from roomcraft.core.config import settings
from roomcraft.core.exceptions import ExternalServiceError
from roomcraft.schemas.products import Product

logger = logging.getLogger(__name__)

RECOMMENDER_SYSTEM_PROMPT = (
    "You are an expert interior designer. You recommend products from a store catalog "
    "for a specific room. Only recommend products that appear in the provided catalog, "
    "using their exact names."
)

RECOMMENDER_INSTRUCTIONS = """Return ONLY a JSON array (no prose) of up to 16 objects with keys:
- productName (string; exact name from the catalog)
- rank (integer; 1 is the best fit)
- reasoning (string; one or two sentences on why it suits this room)
- matchScore (number between 0 and 1)
- suggestedCombinations (array of at most 2 catalog product names that pair well with it)"""


class LLMService:
    """Service for calling the recommender chat model"""

    def __init__(self, client: Optional[openai.AsyncOpenAI] = None):
        """Initialize the LLM service

        Args:
            client: Pre-built client (tests); built from settings when omitted
        """
        self.timeout = settings.openai_timeout
        self.model = settings.openai_model
        self.max_tokens = settings.openai_max_tokens
        self.candidate_limit = settings.recommendation_candidate_limit

        if client is not None:
            self.client = client
        elif settings.openai_api_key:
            # No automatic retries: a failed call goes straight to the fallback path
            self.client = openai.AsyncOpenAI(
                api_key=settings.openai_api_key,
                timeout=self.timeout,
                max_retries=0,
            )
        else:
            logger.warning("OpenAI API key not configured - recommendations will use catalog fallback")
            self.client = None

        self.api_usage_stats = {
            "total_requests": 0,
            "successful_requests": 0,
            "failed_requests": 0,
            "total_tokens": 0,
            "last_reset": datetime.now(),
        }

    def build_messages(self, room_context: str, products: List[Product]) -> List[Dict[str, Any]]:
        """Build system + user messages for the recommender call"""
        catalog = [
            {
                "name": p.name,
                "category": p.category,
                "price": p.price,
                "styleTags": list(p.style_tags),
                "dimensions": p.dimensions.model_dump(),
                "description": p.description or "",
            }
            for p in products
        ]
        user_prompt = (
            f"ROOM:\n{room_context}\n\n"
            f"CATALOG ({len(catalog)} products):\n{json.dumps(catalog, indent=2)}\n\n"
            f"{RECOMMENDER_INSTRUCTIONS}"
        )
        return [
            {"role": "system", "content": RECOMMENDER_SYSTEM_PROMPT},
            {"role": "user", "content": user_prompt},
        ]

    async def call_recommender(self, room_context: str, products: List[Product]) -> str:
        """
        Ask the chat model to pick products for the room

        Only the first `recommendation_candidate_limit` products are sent to
        bound the request size.

        Args:
            room_context: Text description of the room and preferences
            products: Filtered candidate products

        Returns:
            Raw model text, expected to contain a JSON array

        Raises:
            ExternalServiceError: timeout, HTTP/auth/connection failure, or empty reply
        """
        self.api_usage_stats["total_requests"] += 1

        if self.client is None:
            self.api_usage_stats["failed_requests"] += 1
            raise ExternalServiceError("OpenAI API key not configured", kind="not_configured")

        subset = products[: self.candidate_limit]
        if len(products) > len(subset):
            logger.info(f"Truncated recommender candidates from {len(products)} to {len(subset)}")

        messages = self.build_messages(room_context, subset)
        start_time = time.time()

        try:
            response = await asyncio.wait_for(
                self.client.chat.completions.create(
                    model=self.model,
                    messages=messages,
                    max_tokens=self.max_tokens,
                    temperature=settings.openai_temperature,
                ),
                timeout=self.timeout,
            )
        except (asyncio.TimeoutError, openai.APITimeoutError) as e:
            self.api_usage_stats["failed_requests"] += 1
            raise ExternalServiceError(f"Recommender call timed out after {self.timeout}s", kind="timeout") from e
        except openai.AuthenticationError as e:
            self.api_usage_stats["failed_requests"] += 1
            raise ExternalServiceError(e.message, kind="auth", status_code=e.status_code) from e
        except openai.APIStatusError as e:
            self.api_usage_stats["failed_requests"] += 1
            raise ExternalServiceError(e.message, kind="http", status_code=e.status_code) from e
        except openai.APIConnectionError as e:
            self.api_usage_stats["failed_requests"] += 1
            raise ExternalServiceError(str(e), kind="connection") from e

        content = response.choices[0].message.content if response.choices else None
        if not content:
            self.api_usage_stats["failed_requests"] += 1
            raise ExternalServiceError("Recommender returned an empty response", kind="empty")

        self.api_usage_stats["successful_requests"] += 1
        if getattr(response, "usage", None):
            self.api_usage_stats["total_tokens"] += response.usage.total_tokens

        logger.info(
            f"Recommender call successful - Model: {self.model}, "
            f"Response time: {time.time() - start_time:.2f}s, Candidates: {len(subset)}"
        )
        return content

    def get_usage_stats(self) -> Dict[str, Any]:
        """Get API usage statistics"""
        return {
            **self.api_usage_stats,
            "success_rate": (
                self.api_usage_stats["successful_requests"] / max(self.api_usage_stats["total_requests"], 1) * 100
            ),
        }


llm_service = LLMService()
