from dataclasses import dataclass


# fmt: off
@dataclass(frozen=True)
class ShortURLModel:
    target: str             # Original long URL
    shortcode: str          # Content-derived key of the shortened URL
    user_id: int = 0        # Owner of the record, 0 if the writer was unknown
    deleted: bool = False   # Soft-delete tombstone, never reverts to False
# fmt: on
