from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Student


class StudentRepository(Protocol):
    """Repository interface for Student.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_hostel_id(self, hostel_id: str) -> Optional[Student]:
        raise NotImplementedError

    def list_non_admin(self) -> Sequence[Student]:
        raise NotImplementedError
