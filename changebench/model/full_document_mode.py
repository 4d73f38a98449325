from enum import Enum
from typing import Optional


class FullDocumentMode(Enum):
    Default = "default"
    UpdateLookup = "updateLookup"

    @property
    def watch_option(self) -> Optional[str]:
        """
        Value handed to the change stream `full_document` option. The store
        default is expressed by leaving the option unset.
        """
        if self == FullDocumentMode.UpdateLookup:
            return self.value
        return None

    @property
    def embeds_documents(self) -> bool:
        return self == FullDocumentMode.UpdateLookup

    @classmethod
    def choices(cls) -> list[str]:
        return [mode.value for mode in cls]
