from typing import Iterator

from ..config import get_settings
from ..storage import DataStore


def get_store() -> Iterator[DataStore]:
    settings = get_settings()
    yield DataStore(settings.data_path, theme_color=settings.theme_color)
