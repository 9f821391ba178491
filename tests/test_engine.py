"""
Tests for the main ScopeValidationEngine.
"""

from collections.abc import Sequence
from typing import Any

import pytest

from scope_validation import (
    CatalogEntry,
    CatalogUnavailableError,
    DamageObservation,
    InMemoryCatalogStorage,
    IssueCategory,
    Room,
    ScopeItem,
    ScopePolicy,
    ScopeValidationEngine,
    validate_scope_completeness,
)


class FailingStorage:
    """Storage whose catalog listing always fails."""

    def list_catalog_entries(self) -> Sequence[CatalogEntry]:
        raise ConnectionError("database unavailable")


@pytest.fixture
def storage() -> InMemoryCatalogStorage:
    """Catalog with one companion rule."""
    return InMemoryCatalogStorage(
        [
            CatalogEntry(code="DRY", description="Drywall patch"),
            CatalogEntry(
                code="PNT-TEX",
                description="Texture and paint",
                companion_rules={"requires": ["DRY"]},
            ),
            CatalogEntry(code="RC1", description="Remove and replace cabinet"),
        ]
    )


@pytest.fixture
def sample_session() -> dict[str, Any]:
    """A session with problems in several categories."""
    return {
        "rooms": [
            Room(id=1, name="Kitchen"),
            Room(id=2, name="Garage", structure="Detached Garage"),
            Room(id=3, name="Bedroom"),
        ],
        "damages": [
            DamageObservation(id=1, room_id=1, description="Ceiling stain"),
            DamageObservation(id=2, room_id=3, description="Wet carpet"),
        ],
        "scope_items": [
            ScopeItem(
                id=1,
                room_id=1,
                damage_id=1,
                catalog_code="PNT-TEX",
                description="Paint ceiling",
                quantity=100,
                unit="SF",
                trade_code="PNT",
            ),
            ScopeItem(
                id=2,
                room_id=2,
                description="Drywall garage",
                quantity=0,
                unit="SF",
                trade_code="DRY",
                coverage_type="A",
            ),
        ],
    }


def run(storage: InMemoryCatalogStorage, **session: Any):
    return validate_scope_completeness(
        storage,
        1,
        session.get("scope_items", []),
        session.get("rooms", []),
        session.get("damages", []),
    )


class TestScopeValidationEngine:
    """Tests for ScopeValidationEngine."""

    def test_engine_initialization(self) -> None:
        """Test engine initializes with all modules enabled."""
        engine = ScopeValidationEngine()

        assert all(engine.enabled.values())
        assert engine.max_workers == 1
        assert engine.policy == ScopePolicy()

    def test_engine_configuration(self) -> None:
        """Test engine configuration method."""
        engine = ScopeValidationEngine()
        returned = engine.configure(enable_duplicate=False, max_workers=4)

        assert returned is engine
        assert engine.enabled["duplicate"] is False
        assert engine.max_workers == 4

    def test_get_enabled_modules(self) -> None:
        """Test getting list of enabled modules."""
        engine = ScopeValidationEngine(enable_water_classification=False)
        modules = engine.get_enabled_modules()

        assert "Damage Coverage" in modules
        assert "Trade Sequence" in modules
        assert "Water Classification" not in modules
        assert "water_classification" not in engine.get_enabled_modules(keys=True)

    def test_catalog_fetched_once(
        self, storage: InMemoryCatalogStorage, sample_session: dict[str, Any]
    ) -> None:
        """Test the catalog is fetched exactly once per run."""
        run(storage, **sample_session)
        assert storage.fetch_count == 1

    def test_catalog_failure_raises(self, sample_session: dict[str, Any]) -> None:
        """Test catalog failure fails the whole call."""
        engine = ScopeValidationEngine()

        with pytest.raises(CatalogUnavailableError) as exc_info:
            engine.validate(
                FailingStorage(),
                1,
                sample_session["scope_items"],
                sample_session["rooms"],
                sample_session["damages"],
            )
        assert isinstance(exc_info.value.__cause__, ConnectionError)

    def test_sample_session(
        self, storage: InMemoryCatalogStorage, sample_session: dict[str, Any]
    ) -> None:
        """Test a mixed session produces the expected categories."""
        result = run(storage, **sample_session)

        categories = {issue.category for issue in result.issues}
        assert categories == {
            IssueCategory.MISSING_SCOPE,  # Bedroom
            IssueCategory.UNLINKED_DAMAGE,  # Wet carpet
            IssueCategory.MISSING_COMPANION,  # Paint needs DRY in kitchen
            IssueCategory.TRADE_SEQUENCE,  # Garage DRY without DEM/PNT
            IssueCategory.INVALID_QUANTITY,  # Garage drywall quantity 0
            IssueCategory.COVERAGE_MISMATCH,  # Garage billed to A
        }
        assert result.valid is False
        # 3 errors, 3 warnings, 1 suggestion
        assert result.score == 100 - 30 - 9 - 1

    def test_dict_input(self, storage: InMemoryCatalogStorage) -> None:
        """Test validating wire-format dicts."""
        result = validate_scope_completeness(
            storage,
            "session-7",
            [
                {
                    "id": 1,
                    "roomId": 1,
                    "damageId": 1,
                    "description": "Patch",
                    "quantity": 4,
                    "unit": "SF",
                    "tradeCode": "DEM",
                }
            ],
            [{"id": 1, "name": "Kitchen"}],
            [{"id": 1, "roomId": 1, "description": "Hole"}],
        )

        assert result.valid is True
        assert result.score == 100

    def test_water_classification(self, storage: InMemoryCatalogStorage) -> None:
        """Test water classification issues join the main run when provided."""
        engine = ScopeValidationEngine()
        result = engine.validate(
            storage,
            1,
            [ScopeItem(id=1, room_id=1, description="Demo", quantity=1, trade_code="DEM")],
            [Room(id=1, name="Basement")],
            [],
            water_classification={"category": 3},
        )

        assert [i.category for i in result.errors] == [IssueCategory.WATER_CLASSIFICATION]
        assert result.valid is False

    def test_parallel_matches_sequential(
        self, storage: InMemoryCatalogStorage, sample_session: dict[str, Any]
    ) -> None:
        """Test thread-pool execution yields the same ordered result."""
        sequential = ScopeValidationEngine().validate(storage, 1, **sample_session)
        parallel = ScopeValidationEngine(max_workers=4).validate(storage, 1, **sample_session)

        assert parallel == sequential

    def test_disabled_module_is_skipped(
        self, storage: InMemoryCatalogStorage, sample_session: dict[str, Any]
    ) -> None:
        """Test disabling a module removes its issues."""
        engine = ScopeValidationEngine(enable_coverage_type=False)
        result = engine.validate(storage, 1, **sample_session)

        assert result.suggestions == []

    def test_validate_with_formatter(
        self, storage: InMemoryCatalogStorage, sample_session: dict[str, Any]
    ) -> None:
        """Test validate_with_formatter returns formatter."""
        formatter = ScopeValidationEngine().validate_with_formatter(
            storage, 1, **sample_session
        )

        assert "SCOPE VALIDATION REPORT" in formatter.to_text()
        assert '"valid": false' in formatter.to_json()

    def test_custom_policy(self, storage: InMemoryCatalogStorage) -> None:
        """Test policy tables drive the trade sequence rule."""
        policy = ScopePolicy(
            trade_sequences=[{"name": "Roofing", "trigger": "RFG", "sequence": ["DEM", "RFG"]}]
        )
        items = [ScopeItem(id=1, room_id=1, description="Shingles", quantity=3, trade_code="RFG")]
        result = validate_scope_completeness(
            storage, 1, items, [Room(id=1, name="Roof")], [], policy=policy
        )

        assert len(result.warnings) == 1
        assert "Roofing sequence incomplete" in result.warnings[0].message


class TestEndToEndScenarios:
    """End-to-end scenarios for validate_scope_completeness."""

    def test_damage_without_scope(self, storage: InMemoryCatalogStorage) -> None:
        """One room, one damage, zero scope items."""
        result = run(
            storage,
            rooms=[Room(id=1, name="Kitchen")],
            damages=[DamageObservation(id=1, room_id=1, description="Stain")],
        )

        assert [i.category for i in result.errors] == [IssueCategory.MISSING_SCOPE]
        assert result.score <= 90
        assert result.valid is False

    def test_duplicate_items(self, storage: InMemoryCatalogStorage) -> None:
        """Two active RC1 items with the same activity in one room."""
        items = [
            ScopeItem(
                id=i,
                room_id=1,
                catalog_code="RC1",
                activity_type="replace",
                description="Cabinet",
                quantity=1,
                unit="EA",
                trade_code="CAB",
            )
            for i in (1, 2)
        ]
        result = run(storage, scope_items=items, rooms=[Room(id=1, name="Kitchen")])

        assert [i.category for i in result.warnings] == [IssueCategory.DUPLICATE]
        assert result.warnings[0].scope_item_id == 2
        assert result.score == 97
        assert result.valid is True

    def test_detached_garage_coverage(self, storage: InMemoryCatalogStorage) -> None:
        """Detached garage item billed to coverage A."""
        result = run(
            storage,
            scope_items=[
                ScopeItem(
                    id=1,
                    room_id=1,
                    description="Garage door",
                    quantity=1,
                    unit="EA",
                    trade_code="DOR",
                    coverage_type="A",
                )
            ],
            rooms=[Room(id=1, name="Garage", structure="Detached Garage")],
        )

        assert [i.category for i in result.suggestions] == [IssueCategory.COVERAGE_MISMATCH]
        assert "expected B" in result.suggestions[0].message
        assert result.score == 99
        assert result.valid is True

    def test_drywall_only(self, storage: InMemoryCatalogStorage) -> None:
        """Room with only DRY trade items."""
        result = run(
            storage,
            scope_items=[
                ScopeItem(
                    id=1, room_id=1, description="Hang drywall", quantity=64, unit="SF", trade_code="DRY"
                )
            ],
            rooms=[Room(id=1, name="Bedroom")],
        )

        assert [i.category for i in result.warnings] == [IssueCategory.TRADE_SEQUENCE] * 2
        messages = " ".join(i.message for i in result.warnings)
        assert "missing DEM" in messages
        assert "missing PNT" in messages
        assert result.score == 94
        assert result.valid is True

    def test_companion_added_on_rerun(self, storage: InMemoryCatalogStorage) -> None:
        """Adding the required companion removes the error on re-run."""
        rooms = [Room(id=1, name="Hall")]
        paint = ScopeItem(
            id=1, room_id=1, catalog_code="PNT-TEX", description="Paint", quantity=10, trade_code="PNT"
        )
        patch = ScopeItem(
            id=2, room_id=1, catalog_code="DRY", description="Patch", quantity=2, trade_code="GEN"
        )

        before = run(storage, scope_items=[paint], rooms=rooms)
        after = run(storage, scope_items=[paint, patch], rooms=rooms)

        assert len(before.issues_by_category(IssueCategory.MISSING_COMPANION)) == 1
        assert after.issues_by_category(IssueCategory.MISSING_COMPANION) == []


class TestConvenienceFunction:
    """Tests for validate_scope_completeness."""

    def test_empty_session(self, storage: InMemoryCatalogStorage) -> None:
        result = run(storage)

        assert result.valid is True
        assert result.score == 100
        assert result.issues == []
