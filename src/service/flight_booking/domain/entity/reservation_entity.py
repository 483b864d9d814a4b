from typing import Optional

import attrs


@attrs.define
class ReservationEntity:
    rid: int
    username: str
    fid1: int
    fid2: Optional[int] = None
    paid: bool = False

    @property
    def fids(self) -> tuple[int, ...]:
        return (self.fid1,) if self.fid2 is None else (self.fid1, self.fid2)
