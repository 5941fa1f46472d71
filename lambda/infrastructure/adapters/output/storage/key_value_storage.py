"""
Key-Value Storage Adapters - Implementações do armazenamento local do cliente

- InMemoryKeyValueStorage: sessão atual / testes
- JsonFileKeyValueStorage: persiste em um arquivo JSON (sobrevive a reinícios)
"""
import json
import os
from pathlib import Path
from typing import Dict, Optional, Union

from shared.config.logger_config import get_logger

logger = get_logger(child=True)


class InMemoryKeyValueStorage:

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class JsonFileKeyValueStorage:
    """
    Todas as chaves em um único objeto JSON

    Arquivo ausente ou corrompido é tratado como armazenamento vazio; a
    escrita é feita em arquivo temporário + rename.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _load(self) -> Dict[str, str]:
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except ValueError:
            logger.warning("Preferences file is corrupted, starting empty", path=str(self.path))
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with tmp_path.open("w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False)
        os.replace(tmp_path, self.path)

    def get_item(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def remove_item(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)
