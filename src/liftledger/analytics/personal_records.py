"""Personal Record (PR) detection.

This module handles:
- Scanning a training history for the best value of every tracked metric
- Emitting the displayable PRs per exercise
- Detecting which PRs a newly logged record sets
- Summarizing a user's PRs

Each metric remembers the date and record it was achieved in independently,
so an exercise's max weight and max volume can come from different days.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..models.analytics import LOWER_IS_BETTER, ExercisePR, PRSummary, PRType
from ..models.records import Exercise, Modality, TrainingRecord
from ..utils.dates import parse_local_date, parse_record_date

logger = logging.getLogger(__name__)

DEFAULT_RECENT_DAYS = 30


@dataclass
class MetricBest:
    """Best value of one metric and where it was achieved."""

    lower_is_better: bool = False
    value: Optional[float] = None
    date: str = ""
    workout_id: str = ""

    def offer(self, value: Optional[float], record: TrainingRecord) -> bool:
        """Record `value` if it strictly beats the current best.

        Returns:
            True when the best was replaced
        """
        if value is None or value <= 0:
            return False
        if self.value is not None:
            if self.lower_is_better and value >= self.value:
                return False
            if not self.lower_is_better and value <= self.value:
                return False
        self.value = value
        self.date = record.date
        self.workout_id = record.id
        return True

    @property
    def achieved(self) -> bool:
        return self.value is not None and self.value > 0


@dataclass
class StrengthRecord:
    """Strength maxima for one exercise. Max reps is tracked but never emitted."""

    exercise_id: str
    exercise_name: str
    max_weight: MetricBest = field(default_factory=MetricBest)
    max_volume: MetricBest = field(default_factory=MetricBest)
    max_reps: MetricBest = field(default_factory=MetricBest)

    def update(self, exercise: Exercise, record: TrainingRecord) -> None:
        for strength_set in exercise.strength_sets or []:
            self.max_weight.offer(strength_set.weight, record)
            self.max_volume.offer(strength_set.volume, record)
            self.max_reps.offer(strength_set.reps, record)

    def metrics(self) -> List[Tuple[PRType, MetricBest]]:
        return [
            (PRType.MAX_WEIGHT, self.max_weight),
            (PRType.MAX_VOLUME, self.max_volume),
        ]


@dataclass
class CardioRecord:
    """Cardio bests for one exercise."""

    exercise_id: str
    exercise_name: str
    max_distance: MetricBest = field(default_factory=MetricBest)
    max_duration: MetricBest = field(default_factory=MetricBest)
    best_pace: MetricBest = field(default_factory=lambda: MetricBest(lower_is_better=True))

    def update(self, exercise: Exercise, record: TrainingRecord) -> None:
        data = exercise.cardio_data
        if data is None:
            return
        self.max_distance.offer(data.distance, record)
        self.max_duration.offer(data.duration, record)
        self.best_pace.offer(data.effective_pace, record)

    def metrics(self) -> List[Tuple[PRType, MetricBest]]:
        return [
            (PRType.MAX_DISTANCE, self.max_distance),
            (PRType.MAX_DURATION, self.max_duration),
            (PRType.BEST_PACE, self.best_pace),
        ]


@dataclass
class CalisthenicsRecord:
    """Calisthenics bests for one exercise. Hold duration is tracked only."""

    exercise_id: str
    exercise_name: str
    max_reps: MetricBest = field(default_factory=MetricBest)
    max_duration: MetricBest = field(default_factory=MetricBest)

    def update(self, exercise: Exercise, record: TrainingRecord) -> None:
        for calisthenics_set in exercise.calisthenics_sets or []:
            self.max_reps.offer(calisthenics_set.reps, record)
            self.max_duration.offer(calisthenics_set.duration, record)

    def metrics(self) -> List[Tuple[PRType, MetricBest]]:
        return [(PRType.MAX_REPS, self.max_reps)]


_TRACKERS = {
    Modality.STRENGTH: StrengthRecord,
    Modality.CARDIO: CardioRecord,
    Modality.CALISTHENICS: CalisthenicsRecord,
}


@dataclass
class PersonalRecordBook:
    """All per-exercise trackers produced by a history scan, in first-seen order."""

    strength: Dict[str, StrengthRecord] = field(default_factory=dict)
    cardio: Dict[str, CardioRecord] = field(default_factory=dict)
    calisthenics: Dict[str, CalisthenicsRecord] = field(default_factory=dict)

    def _bucket(self, modality: Modality) -> Dict:
        return {
            Modality.STRENGTH: self.strength,
            Modality.CARDIO: self.cardio,
            Modality.CALISTHENICS: self.calisthenics,
        }[modality]

    def add(self, exercise: Exercise, record: TrainingRecord) -> None:
        bucket = self._bucket(exercise.modality)
        key = exercise.key
        tracker = bucket.get(key)
        if tracker is None:
            tracker = _TRACKERS[exercise.modality](exercise_id=key, exercise_name=exercise.name)
            bucket[key] = tracker
        tracker.update(exercise, record)

    def to_prs(self) -> List[ExercisePR]:
        prs: List[ExercisePR] = []
        for modality in (Modality.STRENGTH, Modality.CARDIO, Modality.CALISTHENICS):
            for tracker in self._bucket(modality).values():
                for pr_type, best in tracker.metrics():
                    if not best.achieved:
                        continue
                    prs.append(ExercisePR(
                        exercise_id=tracker.exercise_id,
                        exercise_name=tracker.exercise_name,
                        modality=modality,
                        pr_type=pr_type,
                        value=best.value,
                        date=best.date,
                        workout_id=best.workout_id,
                    ))
        return prs


def _chronological(records: Iterable[TrainingRecord]) -> List[TrainingRecord]:
    """Records with valid dates, ascending. Equal dates keep input order."""
    dated = []
    for record in records:
        parsed = parse_record_date(record.date, "personal_records")
        if parsed is not None:
            dated.append((parsed, record))
    dated.sort(key=lambda item: item[0])
    return [record for _, record in dated]


def scan_personal_records(records: Sequence[TrainingRecord]) -> PersonalRecordBook:
    """Scan a history into per-exercise trackers, including non-displayed maxima."""
    book = PersonalRecordBook()
    for record in _chronological(records):
        for exercise in record.exercises:
            book.add(exercise, record)
    return book


def find_all_prs(
    records: Sequence[TrainingRecord],
    tracked_exercise_ids: Optional[Sequence[str]] = None,
) -> List[ExercisePR]:
    """Find every displayable PR in a history.

    Args:
        records: Workouts or days, in any order
        tracked_exercise_ids: When non-empty, only PRs for these exercise ids

    Returns:
        Strength PRs, then cardio, then calisthenics; within each modality in
        order of the exercise's first appearance
    """
    prs = scan_personal_records(records).to_prs()
    if tracked_exercise_ids:
        tracked = set(tracked_exercise_ids)
        prs = [pr for pr in prs if pr.exercise_id in tracked]
    return prs


def _beats(candidate: ExercisePR, previous: ExercisePR) -> bool:
    if candidate.pr_type in LOWER_IS_BETTER:
        return candidate.value < previous.value
    return candidate.value > previous.value


def detect_new_prs(
    history: Sequence[TrainingRecord],
    record: TrainingRecord,
) -> List[ExercisePR]:
    """PRs that `record` sets on top of `history`.

    A PR counts when the scan including the record credits it to the record and
    it is either new for that exercise and type or strictly better than before.

    Args:
        history: Previously logged records, not including `record`
        record: The newly logged record

    Returns:
        New PRs in the same order as find_all_prs
    """
    before = {
        (pr.exercise_id, pr.modality, pr.pr_type): pr
        for pr in find_all_prs(history)
    }
    new_prs = []
    for pr in find_all_prs(list(history) + [record]):
        if pr.workout_id != record.id or pr.date != record.date:
            continue
        previous = before.get((pr.exercise_id, pr.modality, pr.pr_type))
        if previous is None or _beats(pr, previous):
            new_prs.append(pr)

    if new_prs:
        logger.info(f"Record {record.id or '<unknown>'} set {len(new_prs)} new PR(s)")
    return new_prs


def summarize_prs(
    prs: Sequence[ExercisePR],
    today: Optional[date] = None,
    recent_days: int = DEFAULT_RECENT_DAYS,
) -> PRSummary:
    """Summarize a list of PRs.

    Args:
        prs: PRs as returned by find_all_prs
        today: Reference date, defaults to the local current date
        recent_days: Size of the recent window, today inclusive

    Returns:
        PRSummary with counts by type and the most recently dated PR
    """
    today = today or date.today()
    cutoff = today - timedelta(days=recent_days)

    prs_by_type: Dict[str, int] = {}
    recent = 0
    latest: Optional[ExercisePR] = None
    latest_date: Optional[date] = None

    for pr in prs:
        prs_by_type[pr.pr_type.value] = prs_by_type.get(pr.pr_type.value, 0) + 1
        achieved = parse_local_date(pr.date)
        if achieved is None:
            continue
        if cutoff <= achieved <= today:
            recent += 1
        if latest_date is None or achieved > latest_date:
            latest, latest_date = pr, achieved

    return PRSummary(
        total_prs=len(prs),
        recent_prs=recent,
        prs_by_type=prs_by_type,
        latest_pr=latest,
    )
