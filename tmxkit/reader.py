"""Sources that hand out readable resources for a path."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import BinaryIO, Union

PathLike = Union[str, "os.PathLike[str]"]


class ResourceReader(ABC):
    """Loads resources by path, for example from a virtual filesystem."""

    @abstractmethod
    def read_from(self, path: PathLike) -> BinaryIO:
        """Return a binary stream with the contents of ``path``."""


@dataclass(frozen=True)
class FilesystemResourceReader(ResourceReader):
    """Reads resources from files on disk."""

    def read_from(self, path: PathLike) -> BinaryIO:
        return open(path, "rb")


@dataclass(frozen=True)
class CallableResourceReader(ResourceReader):
    """Reads resources through a function that maps a path to a binary stream."""

    function: Callable[[PathLike], BinaryIO]

    def read_from(self, path: PathLike) -> BinaryIO:
        return self.function(path)