# ============================================================================
# src/bia_ingestion/extractors/segmental_parser.py
# ============================================================================
"""
Segmental Section Parser

The muscle-balance and segmental-fat sections print five body regions in a
two-column table with no region labels the OCR reliably keeps:

    ® 9.6lb MW 125.7%        HM 127.4% @9.8lb       <- arms
    @® 66.4lb MW 108.2%                             <- trunk
    @® 23.2Ib MW 107.4%      HM 108.2% @ 23.4lb     <- legs

Left-column cells read "<marker><lb> <percent>", right-column cells read the
mirror "<percent> <marker><lb>". Region identity comes only from the order of
appearance, which is handled in assign_by_position().
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional

from ..core.context import SegmentalValue
from ..utils.numbers import parse_number
from .patterns import LB_GLYPH, LB_TOKEN, NUM, PCT, PCT_TOKEN, SEGMENT_MARKER

logger = logging.getLogger(__name__)


LB_LINE_RE = re.compile(LB_TOKEN, re.IGNORECASE)
PCT_LINE_RE = re.compile(PCT_TOKEN, re.IGNORECASE)

# "® 9.6lb MW 125.7%"
LEFT_CELL_RE = re.compile(
    rf'{SEGMENT_MARKER}\s*({NUM})\s*{LB_GLYPH}\s*(?:MW|W|M)?\s*({NUM})\s*{PCT}',
    re.IGNORECASE
)

# "HM 127.4% @9.8lb"
RIGHT_CELL_RE = re.compile(
    rf'(?:HM|H)\s*({NUM})\s*{PCT}\s*{SEGMENT_MARKER}\s*({NUM})\s*{LB_GLYPH}',
    re.IGNORECASE
)

MUSCLE_SECTION_PATTERNS = [
    re.compile(r'Muscle\s*balance[\s\S]*?(?:Segmental\s*fat|Fat\s*analysis)', re.IGNORECASE),
    re.compile(r'Muscle\s*balance[\s\S]*?©\s*Muscle\s*Mass', re.IGNORECASE),
]

FAT_SECTION_PATTERNS = [
    re.compile(r'Segmental\s*fat\s*analysis[\s\S]*?(?:Other\s*Measurements|©\s*Fat)', re.IGNORECASE),
    re.compile(r'Segmental\s*fat[\s\S]*?(?:Other\s*Measurements|©\s*Fat)', re.IGNORECASE),
    # Last section on the page; runs to the end when no terminator was captured
    re.compile(r'Segmental\s*fat[\s\S]*', re.IGNORECASE),
]


class SegmentalLayout(str, Enum):
    DUAL_COLUMN = "dual_column"   # arm/trunk/leg rows, left and right columns
    UNKNOWN = "unknown"


@dataclass
class SegmentalSection:
    """Five regions of one section, {0, 0} where nothing was read."""
    left_upper: SegmentalValue = field(default_factory=SegmentalValue)
    right_upper: SegmentalValue = field(default_factory=SegmentalValue)
    trunk: SegmentalValue = field(default_factory=SegmentalValue)
    left_lower: SegmentalValue = field(default_factory=SegmentalValue)
    right_lower: SegmentalValue = field(default_factory=SegmentalValue)


def find_section(text: str, patterns: List[re.Pattern]) -> Optional[str]:
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            return match.group(0)
    return None


def find_muscle_section(text: str) -> Optional[str]:
    return find_section(text, MUSCLE_SECTION_PATTERNS)


def find_fat_section(text: str) -> Optional[str]:
    return find_section(text, FAT_SECTION_PATTERNS)


def candidate_lines(section_text: str) -> List[str]:
    """Lines carrying both a pound glyph and a percent glyph."""
    return [
        line for line in section_text.split('\n')
        if LB_LINE_RE.search(line) and PCT_LINE_RE.search(line)
    ]


def detect_segmental_layout(section_text: str) -> SegmentalLayout:
    for line in candidate_lines(section_text):
        if LEFT_CELL_RE.search(line) or RIGHT_CELL_RE.search(line):
            return SegmentalLayout.DUAL_COLUMN
    return SegmentalLayout.UNKNOWN


def assign_by_position(
    left: List[SegmentalValue],
    right: List[SegmentalValue]
) -> SegmentalSection:
    """
    Map cells to regions by document order.

    Left column: [upper limb, trunk, lower limb]
    Right column: [upper limb, lower limb]  (trunk is a single left cell)
    """
    section = SegmentalSection()
    if len(left) >= 1:
        section.left_upper = left[0]
    if len(left) >= 2:
        section.trunk = left[1]
    if len(left) >= 3:
        section.left_lower = left[2]
    if len(right) >= 1:
        section.right_upper = right[0]
    if len(right) >= 2:
        section.right_lower = right[1]
    return section


def parse_dual_column(section_text: str) -> SegmentalSection:
    left: List[SegmentalValue] = []
    right: List[SegmentalValue] = []

    for line in candidate_lines(section_text):
        for match in LEFT_CELL_RE.finditer(line):
            left.append(SegmentalValue.from_parsed(
                parse_number(match.group(1)), parse_number(match.group(2))
            ))
        for match in RIGHT_CELL_RE.finditer(line):
            right.append(SegmentalValue.from_parsed(
                parse_number(match.group(2)), parse_number(match.group(1))
            ))

    logger.debug(f"Segmental cells: {len(left)} left, {len(right)} right")
    return assign_by_position(left, right)


SECTION_PARSERS: Dict[SegmentalLayout, Callable[[str], SegmentalSection]] = {
    SegmentalLayout.DUAL_COLUMN: parse_dual_column,
}


def parse_segmental_section(section_text: Optional[str]) -> SegmentalSection:
    """
    Parse one segmental section into five region values.

    Args:
        section_text: Text from the section header up to the next section

    Returns:
        SegmentalSection, every region {0, 0} when nothing could be read
    """
    if not section_text:
        return SegmentalSection()

    layout = detect_segmental_layout(section_text)
    parser = SECTION_PARSERS.get(layout)
    if parser is None:
        logger.debug("No recognizable segmental layout in section")
        return SegmentalSection()
    return parser(section_text)
