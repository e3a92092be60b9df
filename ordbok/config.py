import os

from dotenv import load_dotenv

from ordbok.constant import DEFAULT_TARGET_LANGUAGE, Language, OpenAIModel


class Settings:
    """
    Runtime configuration, read from the environment after loading any .env file. Command line
    arguments take precedence over these values.
    """

    api_key: str | None
    model: OpenAIModel
    storage_dir: str
    target_language: Language

    def __init__(self) -> None:
        load_dotenv()
        self.api_key = os.getenv("OPENAI_API_KEY")
        self.model = OpenAIModel(os.getenv("ORDBOK_MODEL", OpenAIModel.GPT_4O_MINI.value))
        self.storage_dir = os.getenv(
            "ORDBOK_STORAGE_DIR", os.path.join(os.path.expanduser("~"), ".ordbok")
        )
        target_language = os.getenv("ORDBOK_TARGET_LANGUAGE")
        self.target_language = (
            Language.from_value(target_language) if target_language else DEFAULT_TARGET_LANGUAGE
        )
