"""Preset catalog loading and registry management."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional

import yaml
from pydantic import ValidationError

from convo_summarizer.personalization.models import (
    FocusArea,
    PresetCatalogFile,
    SummaryStyle,
    ToneOption,
)

logger = logging.getLogger(__name__)

DEFAULT_PRESETS_PATH = Path(__file__).with_name("presets.yaml")


class PresetCatalog:
    """Registry of summary styles, tones and focus areas."""

    def __init__(self) -> None:
        self._styles: Dict[str, SummaryStyle] = {}
        self._tones: Dict[str, ToneOption] = {}
        self._focus_areas: Dict[str, FocusArea] = {}
        self._loaded = False

    def load_from_file(self, presets_path: str | Path) -> None:
        """
        Load presets from a YAML document.

        Args:
            presets_path: Path to the presets YAML file

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValidationError: If the document fails validation
        """
        path = Path(presets_path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            catalog = PresetCatalogFile.model_validate(data)
        except yaml.YAMLError as e:
            logger.error(f"YAML parse error in {path}: {e}")
            raise
        except ValidationError as e:
            logger.error(f"Validation error in {path}: {e}")
            raise

        self._styles.update({style.id: style for style in catalog.styles})
        self._tones.update({tone.id: tone for tone in catalog.tones})
        self._focus_areas.update({area.id: area for area in catalog.focus_areas})
        self._loaded = True
        logger.info(
            f"Presets loaded from {path.name}@{catalog.version}: "
            f"{len(catalog.styles)} styles, {len(catalog.tones)} tones, "
            f"{len(catalog.focus_areas)} focus areas"
        )

    def register_style(self, style: SummaryStyle) -> None:
        self._styles[style.id] = style

    def get_style(self, style_id: str) -> Optional[SummaryStyle]:
        return self._styles.get(style_id)

    def get_tone(self, tone_id: str) -> Optional[ToneOption]:
        return self._tones.get(tone_id)

    def get_focus_area(self, area_id: str) -> Optional[FocusArea]:
        return self._focus_areas.get(area_id)

    def list_styles(self) -> List[SummaryStyle]:
        return list(self._styles.values())

    def list_tones(self) -> List[ToneOption]:
        return list(self._tones.values())

    def list_focus_areas(self) -> List[FocusArea]:
        return list(self._focus_areas.values())

    def is_loaded(self) -> bool:
        """Check if presets have been loaded."""
        return self._loaded

    def clear(self) -> None:
        self._styles.clear()
        self._tones.clear()
        self._focus_areas.clear()
        self._loaded = False


# Global catalog instance
_catalog: Optional[PresetCatalog] = None


def get_preset_catalog() -> PresetCatalog:
    """Get the global catalog, loading the packaged presets on first use."""
    global _catalog
    if _catalog is None:
        _catalog = PresetCatalog()
        _catalog.load_from_file(DEFAULT_PRESETS_PATH)
    return _catalog


def reload_presets(presets_path: str | Path = DEFAULT_PRESETS_PATH) -> None:
    """
    Reload presets from a YAML file.

    Args:
        presets_path: Path to presets file
    """
    catalog = get_preset_catalog()
    catalog.clear()
    catalog.load_from_file(presets_path)
