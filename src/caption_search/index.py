"""In-memory caption index with case-insensitive substring search."""

from collections.abc import Iterable

from caption_search.models import Caption, MarkerOptions, Match

MIN_QUERY_LENGTH = 3


class CaptionIndex:
    """Ordered, read-only collection of captions.

    Queries are a linear scan; nothing is sorted, deduplicated or cached, so
    repeated queries are side-effect free and return equal results.
    """

    def __init__(self, captions: Iterable[Caption], min_query_length: int = MIN_QUERY_LENGTH):
        self._captions = tuple(captions)
        self._min_query_length = min_query_length

    @property
    def captions(self) -> tuple[Caption, ...]:
        return self._captions

    def __len__(self) -> int:
        return len(self._captions)

    def query(
        self,
        needle: str,
        duration: float,
        options: MarkerOptions | None = None,
    ) -> list[Match]:
        """Return captions containing ``needle`` with their timeline positions."""
        if duration <= 0:
            raise ValueError(f"Duration must be positive, got {duration}")

        needle_upper = needle.upper()
        if len(needle_upper) < self._min_query_length:
            return []

        display = (options or MarkerOptions()).display
        matches = []
        for caption in self._captions:
            if needle_upper not in caption.text.upper():
                continue
            extent = 0.0
            if display == "line":
                extent = max(caption.end - caption.start, 0) / duration
            matches.append(
                Match(
                    caption=caption,
                    position=caption.start / duration,
                    extent=extent,
                )
            )
        return matches


def build_index(captions: Iterable[Caption], min_query_length: int = MIN_QUERY_LENGTH) -> CaptionIndex:
    return CaptionIndex(captions, min_query_length=min_query_length)


def query(
    index: CaptionIndex,
    needle: str,
    duration: float,
    options: MarkerOptions | None = None,
) -> list[Match]:
    return index.query(needle, duration, options)


def marker_style(match: Match, options: MarkerOptions) -> dict[str, str | int]:
    """Style mapping for drawing ``match`` on a seek bar.

    Positions outside [0, 1] are passed through; the renderer decides
    whether to clamp or hide them.
    """
    width = options.width
    style: dict[str, str | int] = {
        "position": "absolute",
        "left": f"{match.position * 100}%",
        "width": f"{width}px",
        "background": options.color,
        "z-index": 5000,
    }
    if options.display == "point":
        style.update({
            "top": "50%",
            "margin-top": f"{width / -2}px",
            "margin-left": f"{width / -2}px",
            "height": f"{width}px",
            "border-radius": "100%",
        })
        return style

    if match.extent > 0:
        style["width"] = f"max({width}px, {match.extent * 100}%)"
    if options.height:
        style.update({
            "top": "50%",
            "transform": "translateY(-50%)",
            "height": options.height,
        })
    else:
        style.update({"top": 0, "bottom": 0})
    return style
