import json
import logging
from pathlib import Path
from typing import List, Union

from app.errors import CorpusLoadError, EmptyCorpus
from services.corpus import Passage, TextCorpus

log = logging.getLogger(__name__)

# bundled passages sit next to the packages, not in the working directory
DEFAULT_TEXTS = Path(__file__).resolve().parent.parent / "assets" / "texts.json"

_FALLBACK = [
    Passage(
        content=(
            "Welcome to Typerpunk. Type this passage exactly as shown; correct "
            "characters turn green and mistakes turn red."
        ),
        attribution="Typerpunk",
        category="",
    ),
    Passage(
        content="The quick brown fox jumps over the lazy dog.",
        attribution="Traditional pangram",
        category="",
    ),
]


def _clean(text: str) -> str:
    # passages are typed on one line: collapse newlines and runs of spaces
    return " ".join(str(text).split())


def _passage_from_dict(d, index: int, path) -> Passage:
    if not isinstance(d, dict):
        raise CorpusLoadError(path, f"entry {index} is not an object")
    if "content" not in d:
        raise CorpusLoadError(path, f"entry {index} has no content")
    return Passage(
        content=_clean(d["content"]),
        attribution=str(d.get("attribution", "") or ""),
        category=str(d.get("category", "") or "").strip(),
    )


def load_passages(path: Union[str, Path] = DEFAULT_TEXTS) -> List[Passage]:
    """
    Read passages from a JSON array of {category, content, attribution}.
    A missing file yields the built-in fallback passages; entries whose
    content is blank are skipped.
    """
    p = Path(path)
    if not p.exists():
        log.warning("Text file %s not found, using built-in passages", p)
        return list(_FALLBACK)
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise CorpusLoadError(p, str(e)) from e
    if not isinstance(data, list):
        raise CorpusLoadError(p, "expected a JSON array of passages")

    passages = []
    for i, item in enumerate(data):
        passage = _passage_from_dict(item, i, p)
        if not passage.content:
            log.warning("Skipping empty passage %d in %s", i, p)
            continue
        passages.append(passage)
    log.info("Loaded %d passages from %s", len(passages), p)
    return passages


def load_corpus(path: Union[str, Path] = DEFAULT_TEXTS) -> TextCorpus:
    passages = load_passages(path)
    if not passages:
        raise EmptyCorpus(f"no passages in {path}")
    return TextCorpus(passages)
