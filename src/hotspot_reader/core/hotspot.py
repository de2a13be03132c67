"""Hotspot entities and the document that groups them by page image."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


class DocumentFormatError(ValueError):
    """Raised when a hotspot document does not have the expected shape."""


@dataclass(frozen=True)
class Hotspot:
    """A rectangular region of a page image, in unit-square coordinates.

    Attributes:
        x: Left edge, 0.0 at the image's left border.
        y: Top edge, 0.0 at the image's top border.
        w: Width as a fraction of the displayed image width.
        h: Height as a fraction of the displayed image height.
        text: Passage text, spoken when no pre-rendered audio plays.
    """

    x: float
    y: float
    w: float
    h: float
    text: str

    def to_dict(self) -> Dict[str, Any]:
        return {"x": self.x, "y": self.y, "w": self.w, "h": self.h, "text": self.text}

    @classmethod
    def from_dict(cls, data: Any) -> "Hotspot":
        """Build a hotspot from its JSON form.

        Raises:
            DocumentFormatError: if a coordinate is missing or not numeric.
        """
        if not isinstance(data, dict):
            raise DocumentFormatError(f"Hotspot must be an object, got {type(data).__name__}")
        try:
            coords = [float(data[key]) for key in ("x", "y", "w", "h")]
        except (KeyError, TypeError, ValueError) as e:
            raise DocumentFormatError(f"Invalid hotspot coordinates: {data!r}") from e
        text = data.get("text") or ""
        return cls(*coords, text=str(text))


@dataclass(frozen=True)
class PageRef:
    """A page of the book, identified by its image reference."""

    img: str


def default_pages(total_pages: int) -> List[PageRef]:
    """Pages named 1.png .. N.png, cover first."""
    return [PageRef(img=f"{number}.png") for number in range(1, total_pages + 1)]


@dataclass
class HotspotDocument:
    """The persisted/exported unit: pages plus hotspots keyed by image id.

    ``pages`` is None when a loaded document did not carry a pages list.
    """

    pages: Optional[List[PageRef]] = None
    hotspots: Dict[str, List[Hotspot]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pages": [{"img": page.img} for page in self.pages or []],
            "hotspots": {
                image_id: [hotspot.to_dict() for hotspot in hotspots]
                for image_id, hotspots in self.hotspots.items()
            },
        }

    @classmethod
    def from_dict(cls, data: Any) -> "HotspotDocument":
        """Parse ``{"pages": [...], "hotspots": {...}}``; either key may be absent.

        Raises:
            DocumentFormatError: if neither key is present or a value is malformed.
        """
        if not isinstance(data, dict):
            raise DocumentFormatError("Document must be a JSON object")

        raw_pages = data.get("pages")
        raw_hotspots = data.get("hotspots")
        if raw_pages is None and raw_hotspots is None:
            raise DocumentFormatError(
                "JSON format not recognized. Expecting {pages: [...], hotspots: {...}} or exported file."
            )

        pages = None
        if isinstance(raw_pages, list) and raw_pages:
            pages = [cls._parse_page(item) for item in raw_pages]

        hotspots: Dict[str, List[Hotspot]] = {}
        if raw_hotspots is not None:
            if not isinstance(raw_hotspots, dict):
                raise DocumentFormatError("'hotspots' must map image names to lists")
            for image_id, items in raw_hotspots.items():
                if not isinstance(items, list):
                    raise DocumentFormatError(f"Hotspots for {image_id!r} must be a list")
                hotspots[str(image_id)] = [Hotspot.from_dict(item) for item in items]

        return cls(pages=pages, hotspots=hotspots)

    @staticmethod
    def _parse_page(item: Any) -> PageRef:
        if isinstance(item, str):
            return PageRef(img=item)
        if isinstance(item, dict) and isinstance(item.get("img"), str):
            return PageRef(img=item["img"])
        raise DocumentFormatError(f"Invalid page entry: {item!r}")
