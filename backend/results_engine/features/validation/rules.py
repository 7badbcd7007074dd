"""
Per-distance plausibility rules.

Floors sit just under the world record for the distance, ceilings are
generous course cutoffs. Lookups accept the canonical keys in any case
plus common aliases ("10km", "21.1k", "70.3", ...).
"""

from __future__ import annotations

from results_engine.shared.constants import RaceType

from .models import DistanceRules


def _hms(hours: float = 0, minutes: float = 0, seconds: float = 0) -> int:
    return int(hours * 3600 + minutes * 60 + seconds)


DISTANCE_RULES: dict[str, DistanceRules] = {
    "5K": DistanceRules(
        distance_meters=5000,
        min_time_seconds=_hms(minutes=12),  # WR ~12:35
        max_time_seconds=_hms(hours=1),
        race_type=RaceType.RUNNING,
        expected_checkpoints=["2.5km", "finish"],
        world_record_male=_hms(minutes=12, seconds=35),
        world_record_female=_hms(minutes=14),
    ),
    "10K": DistanceRules(
        distance_meters=10000,
        min_time_seconds=_hms(minutes=26),  # WR ~26:11
        max_time_seconds=_hms(hours=2),
        race_type=RaceType.RUNNING,
        expected_checkpoints=["5km", "finish"],
        world_record_male=_hms(minutes=26, seconds=11),
        world_record_female=_hms(minutes=28, seconds=54),
    ),
    "Half Marathon": DistanceRules(
        distance_meters=21097,
        min_time_seconds=_hms(minutes=57),  # WR ~57:30
        max_time_seconds=_hms(hours=4),
        race_type=RaceType.RUNNING,
        expected_checkpoints=["5km", "10km", "15km", "20km", "finish"],
        world_record_male=_hms(minutes=57, seconds=30),
        world_record_female=_hms(minutes=63, seconds=44),
    ),
    "Marathon": DistanceRules(
        distance_meters=42195,
        min_time_seconds=_hms(hours=2),  # WR ~2:00:35
        max_time_seconds=_hms(hours=8),
        race_type=RaceType.RUNNING,
        expected_checkpoints=[
            "5km", "10km", "15km", "21.1km", "25km", "30km", "35km", "40km", "finish",
        ],
        world_record_male=_hms(hours=2, seconds=35),
        world_record_female=_hms(hours=2, minutes=11, seconds=53),
    ),
    "Ultra 50K": DistanceRules(
        distance_meters=50000,
        min_time_seconds=_hms(hours=2.5),
        max_time_seconds=_hms(hours=12),
        race_type=RaceType.ULTRA,
        expected_checkpoints=["10km", "20km", "30km", "40km", "finish"],
    ),
    "Ultra 100K": DistanceRules(
        distance_meters=100000,
        min_time_seconds=_hms(hours=6),
        max_time_seconds=_hms(hours=24),
        race_type=RaceType.ULTRA,
        expected_checkpoints=["25km", "50km", "75km", "finish"],
    ),
    "Sprint Triathlon": DistanceRules(
        distance_meters=25750,  # 750m swim + 20km bike + 5km run
        min_time_seconds=_hms(minutes=50),
        max_time_seconds=_hms(hours=3),
        race_type=RaceType.TRIATHLON,
        expected_checkpoints=["swim", "T1", "bike", "T2", "run", "finish"],
    ),
    "Olympic Triathlon": DistanceRules(
        distance_meters=51500,  # 1.5km swim + 40km bike + 10km run
        min_time_seconds=_hms(hours=1.5),
        max_time_seconds=_hms(hours=5),
        race_type=RaceType.TRIATHLON,
        expected_checkpoints=["swim", "T1", "bike", "T2", "run", "finish"],
    ),
    "Half Ironman": DistanceRules(
        distance_meters=112997,  # 1.9km swim + 90km bike + 21.1km run
        min_time_seconds=_hms(hours=3.5),
        max_time_seconds=_hms(hours=9),
        race_type=RaceType.TRIATHLON,
        expected_checkpoints=["swim", "T1", "bike", "T2", "run_10km", "finish"],
    ),
    "Ironman": DistanceRules(
        distance_meters=225995,  # 3.8km swim + 180km bike + 42.2km run
        min_time_seconds=_hms(hours=7),
        max_time_seconds=_hms(hours=17),
        race_type=RaceType.TRIATHLON,
        expected_checkpoints=["swim", "T1", "bike", "T2", "run_21km", "finish"],
    ),
    "Sprint Duathlon": DistanceRules(
        distance_meters=27500,  # 5km run + 20km bike + 2.5km run
        min_time_seconds=_hms(minutes=50),
        max_time_seconds=_hms(hours=3),
        race_type=RaceType.DUATHLON,
        expected_checkpoints=["run1", "T1", "bike", "T2", "run2", "finish"],
    ),
}

# Lower-cased alias → canonical key
DISTANCE_ALIASES: dict[str, str] = {
    "5km": "5K",
    "5 km": "5K",
    "10km": "10K",
    "10 km": "10K",
    "half": "Half Marathon",
    "half-marathon": "Half Marathon",
    "21k": "Half Marathon",
    "21km": "Half Marathon",
    "21.1k": "Half Marathon",
    "21.1km": "Half Marathon",
    "full marathon": "Marathon",
    "42k": "Marathon",
    "42km": "Marathon",
    "42.2k": "Marathon",
    "42.2km": "Marathon",
    "50k": "Ultra 50K",
    "50km": "Ultra 50K",
    "100k": "Ultra 100K",
    "100km": "Ultra 100K",
    "70.3": "Half Ironman",
    "ironman 70.3": "Half Ironman",
    "140.6": "Ironman",
    "ironman 140.6": "Ironman",
}

_CANONICAL_BY_LOWER = {key.lower(): key for key in DISTANCE_RULES}

_TRIATHLON_HINTS = ("triathlon", "ironman", "70.3", "140.6")
_DUATHLON_HINTS = ("duathlon",)
_ULTRA_HINTS = ("ultra", "50k", "100k", "100 mile")


def canonical_distance_name(distance_name: str | None) -> str | None:
    """Map a scraped distance label to its canonical key, if known."""
    if not distance_name:
        return None
    if distance_name in DISTANCE_RULES:
        return distance_name

    key = " ".join(distance_name.lower().split())
    return _CANONICAL_BY_LOWER.get(key) or DISTANCE_ALIASES.get(key)


def get_distance_rules(distance_name: str | None) -> DistanceRules | None:
    """Plausibility rules for a distance, None when unrecognized."""
    canonical = canonical_distance_name(distance_name)
    return DISTANCE_RULES[canonical] if canonical else None


def detect_race_type(distance_name: str | None) -> RaceType:
    """Classify a distance label into a race family (running by default)."""
    rules = get_distance_rules(distance_name)
    if rules is not None:
        return rules.race_type

    label = (distance_name or "").lower()
    if any(hint in label for hint in _TRIATHLON_HINTS):
        return RaceType.TRIATHLON
    if any(hint in label for hint in _DUATHLON_HINTS):
        return RaceType.DUATHLON
    if any(hint in label for hint in _ULTRA_HINTS):
        return RaceType.ULTRA
    return RaceType.RUNNING


def get_expected_checkpoints(distance_name: str | None) -> list[str]:
    """Checkpoints a complete result for this distance should carry."""
    rules = get_distance_rules(distance_name)
    return list(rules.expected_checkpoints) if rules else []
