import abc
from typing import Any

from openai import AsyncOpenAI

from ordbok.constant import OpenAIModel
from ordbok.exception import EmptyResponseException
from ordbok.log import logger


class Generator(abc.ABC):
    """
    An abstract base class for text generators. A generator turns a prompt into raw text, and is
    treated as an unreliable black box: the text it returns is only expected to be mostly JSON.
    Transport errors must keep the status code or the word "quota" in their message so that
    rate limits can be recognised and retried.
    """

    lookup_key: str
    requests_made: int = 0

    @abc.abstractmethod
    async def generate(
        self,
        prompt: str,
        response_format: dict[str, Any] | None = None,
        temperature: float = 0,
        system_prompt: str = "",
    ) -> str:
        """Returns the raw text generated for a prompt."""
        raise NotImplementedError()

    async def close(self) -> None:
        """Releases any resources held by the generator."""
        return None


class OpenAIGenerator(Generator):
    """
    Uses the OpenAI API to generate text. The API is accessed via the openai library, and a JSON
    schema describing the expected response is passed along as structured output.
    """

    client: AsyncOpenAI
    lookup_key = "openai"
    model: OpenAIModel

    def __init__(
        self, model: OpenAIModel = OpenAIModel.GPT_4O_MINI, api_key: str | None = None
    ) -> None:
        self.model = model
        self.client = AsyncOpenAI(api_key=api_key)

    async def generate(
        self,
        prompt: str,
        response_format: dict[str, Any] | None = None,
        temperature: float = 0,
        system_prompt: str = "",
    ) -> str:
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})
        kwargs: dict[str, Any] = {}
        if response_format is not None:
            kwargs["response_format"] = {
                "type": "json_schema",
                "json_schema": {"name": "response", "schema": response_format, "strict": False},
            }
        response = await self.client.chat.completions.create(
            model=self.model.value,
            messages=messages,  # type: ignore[arg-type]
            temperature=temperature,
            **kwargs,
        )
        self.requests_made += 1
        logger.debug(f"OpenAI request {self.requests_made} completed ({self.model.value})")
        if not response.choices or not (content := response.choices[0].message.content):
            raise EmptyResponseException()
        return content

    async def close(self) -> None:
        await self.client.close()


class GeneratorFactory:
    @staticmethod
    def create_generator(
        generator_type: str,
        model: OpenAIModel = OpenAIModel.GPT_4O_MINI,
        api_key: str | None = None,
    ) -> Generator:
        generators: list[type[Generator]] = [OpenAIGenerator]
        for generator in generators:
            if generator.lookup_key == generator_type:
                return generator(model=model, api_key=api_key)  # type: ignore[call-arg]
        raise ValueError(f"Unknown generator type: {generator_type}")


__all__ = ["Generator", "GeneratorFactory", "OpenAIGenerator"]
