from src.medattend.medattend.core.enums import ComponentType, RiskLevel
from src.medattend.medattend.eligibility.aggregator import aggregate, eligibility_score
from src.medattend.medattend.eligibility.service import DashboardService
from src.medattend.medattend.settings.model import UserSettings
from src.medattend.medattend.state.snapshot import Snapshot
from src.medattend.medattend.state.store import StateStore
from src.medattend.medattend.subjects.model import Subject, SubjectComponent


def _component(cid, attended, total, pct=75, component_type=ComponentType.THEORY):
    return SubjectComponent(cid, component_type, attended=attended, total=total, required_percent=pct)


def test_percent_is_pooled_not_averaged():
    summary = aggregate([_component("a", 10, 10), _component("b", 0, 90)])

    assert summary.attended == 10
    assert summary.total == 100
    assert summary.percent == 10.0


def test_aggregate_counts_risk_buckets_and_units():
    summary = aggregate(
        [
            _component("safe", 80, 100),  # +5
            _component("border", 73, 100),  # -2
            _component("danger", 60, 100),  # -15
        ]
    )

    assert (summary.safe_count, summary.borderline_count, summary.danger_count) == (1, 1, 1)
    assert summary.safe_units == 5
    assert summary.deficit_units == 17


def test_aggregate_with_no_components():
    summary = aggregate([])

    assert summary.total == 0
    assert summary.percent == 0.0
    assert summary.eligibility_score == 80


def test_eligibility_score():
    assert eligibility_score(0, 90.0) == 100
    assert eligibility_score(0, 74.9) == 80
    assert eligibility_score(2, 50.0) == 70
    assert eligibility_score(10, 10.0) == 0


def _store(settings=None):
    pharma = Subject(
        "s1",
        "Pharmacology",
        (
            _component("t", 80, 100, 75, ComponentType.THEORY),
            _component("p", 5, 10, 80, ComponentType.PRACTICAL),
        ),
    )
    anatomy = Subject("s2", "Anatomy", (_component("t2", 74, 100, 75),))
    return StateStore(Snapshot(subjects=(pharma, anatomy), settings=settings or UserSettings()))


def test_dashboard_rollups():
    dashboard = DashboardService(_store()).build()

    assert dashboard.overall.attended == 159
    assert dashboard.overall.total == 210

    by_name = {r.subject_name: r for r in dashboard.subjects}
    assert by_name["Pharmacology"].risk == RiskLevel.DANGER
    assert by_name["Anatomy"].risk == RiskLevel.BORDERLINE
    assert [row.component_id for row in dashboard.danger] == ["p"]

    theory, practical = dashboard.by_type
    assert theory.component_type == ComponentType.THEORY
    assert theory.target_percent == 75
    assert theory.summary.total == 200
    assert practical.target_percent == 80
    assert practical.summary.percent == 50.0


def test_dashboard_targets_follow_scholarship_setting():
    dashboard = DashboardService(_store(UserSettings(is_scholarship=True))).build()

    assert [t.target_percent for t in dashboard.by_type] == [80, 85]


def test_component_rows_expose_exact_recovery():
    store = _store()
    rollup = DashboardService(store).subject_rollup(store.snapshot.subjects[0])
    practical = rollup.components[1]

    assert practical.eligibility.units_needed == 3
    assert practical.exact_units_to_recover == 15


class _CountingStore:
    """Hands out a different snapshot on every read."""

    def __init__(self, *snapshots):
        self._snapshots = list(snapshots)
        self.reads = 0

    @property
    def snapshot(self):
        self.reads += 1
        return self._snapshots[min(self.reads, len(self._snapshots)) - 1]


def test_dashboard_reads_the_snapshot_once():
    before = _store().snapshot
    after = Snapshot(settings=UserSettings(is_scholarship=True))
    store = _CountingStore(before, after)

    dashboard = DashboardService(store).build()

    assert store.reads == 1
    assert dashboard.overall.total == 210
    assert sum(t.summary.total for t in dashboard.by_type) == 210
    assert [t.target_percent for t in dashboard.by_type] == [75, 80]
