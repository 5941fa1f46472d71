"""
Output Port: Armazenamento chave-valor local do cliente
Equivalente ao localStorage do navegador (não sincroniza entre dispositivos)
"""
from typing import Optional, Protocol


class IKeyValueStorage(Protocol):

    def get_item(self, key: str) -> Optional[str]:
        ...

    def set_item(self, key: str, value: str) -> None:
        ...

    def remove_item(self, key: str) -> None:
        ...
