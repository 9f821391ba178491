#!/usr/bin/env python3
"""
Sample Validation Script.
Demonstrates usage of the Scope Validation Engine.
"""

from scope_validation import (
    CatalogEntry,
    DamageObservation,
    InMemoryCatalogStorage,
    Room,
    ScopeItem,
    ScopeValidationEngine,
    WaterCategory,
    WaterClassification,
    configure_logging,
    validate_companions_post_auto_add,
)


def create_sample_catalog() -> InMemoryCatalogStorage:
    """Create a small repair catalog for demonstration."""
    return InMemoryCatalogStorage(
        [
            CatalogEntry(code="DRY-PATCH", description="Drywall patch - small area"),
            CatalogEntry(
                code="PNT-TEXMATCH",
                description="Texture match and paint",
                companion_rules={"requires": ["DRY-PATCH"]},
            ),
            CatalogEntry(code="DEM-DRY-SF", description="Tear out wet drywall"),
            CatalogEntry(code="FLR-CPT", description="Carpet - install"),
            # Dict entries work too, exactly as they come off the wire
            {"code": "MIT-AIRM", "description": "Air mover (per 24 hr period)"},
        ]
    )


def create_sample_session() -> tuple[list[ScopeItem], list[Room], list[DamageObservation]]:
    """Create rooms, damages and a scope with several problems."""
    rooms = [
        Room(id=1, name="Kitchen"),
        Room(id=2, name="Living Room"),
        Room(id=3, name="Garage", structure="Detached Garage"),
        Room(id=4, name="Hallway"),
    ]

    damages = [
        DamageObservation(id=10, room_id=1, description="Water stain on ceiling"),
        DamageObservation(id=11, room_id=2, description="Wet carpet near slider"),
        DamageObservation(id=12, room_id=4, description="Baseboard swelling"),
    ]

    scope_items = [
        # Paint without the drywall patch it requires
        ScopeItem(
            id=100,
            room_id=1,
            damage_id=10,
            catalog_code="PNT-TEXMATCH",
            description="Texture match and paint ceiling",
            quantity=120,
            unit="SF",
            trade_code="PNT",
            coverage_type="A",
        ),
        # Drywall in the living room without demolition or paint
        ScopeItem(
            id=101,
            room_id=2,
            catalog_code="DRY-PATCH",
            description="Drywall patch",
            quantity=32,
            unit="SF",
            trade_code="DRY",
            coverage_type="A",
        ),
        # Probably meant 120, not 12000
        ScopeItem(
            id=102,
            room_id=2,
            damage_id=11,
            catalog_code="FLR-CPT",
            description="Carpet - install",
            quantity=12000,
            unit="SF",
            trade_code="FLR",
            coverage_type="A",
            activity_type="install",
        ),
        ScopeItem(
            id=103,
            room_id=2,
            catalog_code="FLR-CPT",
            description="Carpet - install",
            quantity=120,
            unit="SF",
            trade_code="FLR",
            coverage_type="A",
            activity_type="install",
        ),
        # Garage billed to dwelling coverage
        ScopeItem(
            id=104,
            room_id=3,
            catalog_code="DEM-DRY-SF",
            description="Tear out wet drywall",
            quantity=0,
            unit="SF",
            trade_code="DEM",
            coverage_type="A",
        ),
        # Superseded items never participate
        ScopeItem(
            id=105,
            room_id=4,
            description="Old baseboard line",
            quantity=20,
            unit="LF",
            trade_code="FNC",
            status="superseded",
        ),
        # Auto-added companion far larger than its primary
        ScopeItem(
            id=106,
            room_id=2,
            catalog_code="MIT-AIRM",
            description="Air mover (per 24 hr period)",
            quantity=400,
            unit="EA",
            trade_code="MIT",
            parent_scope_item_id=101,
        ),
    ]

    return scope_items, rooms, damages


def main() -> None:
    """Run sample validation demonstration."""
    configure_logging("INFO")

    print("=" * 70)
    print("SCOPE VALIDATION ENGINE - SAMPLE RUN")
    print("=" * 70)
    print()

    storage = create_sample_catalog()
    scope_items, rooms, damages = create_sample_session()

    engine = ScopeValidationEngine()
    print(f"Enabled Modules: {', '.join(engine.get_enabled_modules())}")
    print()

    formatter = engine.validate_with_formatter(
        storage,
        session_id=42,
        scope_items=scope_items,
        rooms=rooms,
        damages=damages,
        water_classification=WaterClassification(
            category=WaterCategory.CATEGORY_3, water_class=2
        ),
    )
    formatter.print_full()

    print()
    print("-" * 70)
    print("JSON Output (first 500 chars):")
    print("-" * 70)
    json_output = formatter.to_json()
    print(json_output[:500] + "..." if len(json_output) > 500 else json_output)

    print()
    print("-" * 70)
    print("POST AUTO-ADD COMPANION CHECK")
    print("-" * 70)
    for issue in validate_companions_post_auto_add(scope_items):
        print(f"[{issue.severity.value}] {issue.message}")


if __name__ == "__main__":
    main()
