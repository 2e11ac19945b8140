import random

from platter.collaborators import NamerRequest, NamerResponse, parse_namer_response
from platter.config import settings
from platter.dinner import find_dinner
from platter.logger import logger
from platter.normalization import sanitize_for_prompt

_NAMER_PROMPT_TEMPLATE = """\
You name low-effort dinners: the meals eaten standing over the sink, on the
couch, or straight from the container at 11pm.

Your vibe: supportive but snarky, self-deprecating millennial humor. You
celebrate chaos, you never judge it.

Your job:
1. A funny, relatable name (2-4 words)
2. ONE validating sentence
3. ONE specific tip about THEIR ingredients

Return ONLY a JSON object, no markdown, no emojis:
{{"name": "...", "validation": "...", "tip": "..."}}

Ingredients: {ingredients}
"""


class DinnerNamer:
    """Names a dinner with an LLM, falling back to the curated table.

    The client only needs an `invoke(prompt)` method returning an object
    with a `.text` attribute. Without one (and without an API key) every
    call goes straight to the fallback.
    """

    def __init__(self, client=None, rng: random.Random | None = None):
        self.client = client
        self.rng = rng
        if self.client is None and settings.openai_api_key:
            from datapizza.clients.openai import OpenAIClient

            self.client = OpenAIClient(
                api_key=settings.openai_api_key,
                model=settings.llm_model,
                temperature=settings.llm_temperature,
            )

    def _build_prompt(self, request: NamerRequest) -> str:
        return _NAMER_PROMPT_TEMPLATE.format(ingredients=request.ingredients)

    def fallback(self, ingredients: str) -> NamerResponse:
        match = find_dinner(ingredients, self.rng)
        return NamerResponse(name=match.name, validation=match.validation, tip=match.tip)

    def name(self, ingredients: str) -> NamerResponse:
        request = NamerRequest(ingredients=sanitize_for_prompt(ingredients))
        if not request.ingredients:
            return self.fallback(ingredients)
        if self.client is None:
            logger.debug("[namer] no LLM client configured, using curated table")
            return self.fallback(request.ingredients)

        try:
            response = self.client.invoke(self._build_prompt(request))
            parsed = parse_namer_response(response.text)
        except Exception as e:
            logger.warning(f"[namer] LLM call failed, using curated table: {e}")
            return self.fallback(request.ingredients)

        if parsed is None:
            logger.warning("[namer] unusable LLM response, using curated table")
            return self.fallback(request.ingredients)

        words = parsed.name.split()
        if len(words) > 5:
            parsed.name = " ".join(words[:4])
        return parsed
