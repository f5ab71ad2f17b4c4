"""Tests for VehicleService."""

import re
from datetime import datetime, timezone

import pytest

from junkyard.core.service import VehicleService, normalize_nickname
from junkyard.models.inputs import CoupeInput, MiniVanInput, MotorcycleInput, SedanInput
from junkyard.models.results import ErrorCode
from junkyard.models.settings import RegistrationPolicy
from junkyard.models.vehicle import Coupe, MiniVan, Motorcycle, Sedan

FIXED_NOW = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

LATER = datetime(2024, 6, 1, 8, 30, 0, tzinfo=timezone.utc)


class TestNormalizeNickname:
    def test_trim_and_casefold(self):
        assert normalize_nickname("  My CAR ") == "my car"

    def test_equal_forms(self):
        assert normalize_nickname("Dup") == normalize_nickname(" DUP ")


class TestCreateVehicle:
    def test_sedan_defaults(self, service):
        result = service.create_vehicle(
            SedanInput(nickname="Test Sedan", mileage=50000), []
        )
        assert result.ok
        vehicle = result.value
        assert isinstance(vehicle, Sedan)
        assert vehicle.wheels == 4
        assert vehicle.doors == 4
        assert vehicle.engine_status == "works"
        assert vehicle.registration.status == "registered"
        assert re.match(r"^SEDAN-[A-Z0-9]{5}$", vehicle.registration.registration_id)

    def test_assigns_id_and_timestamps(self, service):
        vehicle = service.create_vehicle(SedanInput(nickname="S", mileage=1), []).value
        assert re.match(
            r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
            vehicle.id,
        )
        assert vehicle.created_at == FIXED_NOW
        assert vehicle.updated_at == FIXED_NOW

    def test_coupe_defaults(self, service):
        vehicle = service.create_vehicle(CoupeInput(nickname="C", mileage=1), []).value
        assert isinstance(vehicle, Coupe)
        assert vehicle.wheels == 4
        assert vehicle.doors == 2

    def test_motorcycle_defaults(self, service):
        vehicle = service.create_vehicle(
            MotorcycleInput(nickname="M", mileage=1), []
        ).value
        assert isinstance(vehicle, Motorcycle)
        assert vehicle.wheels == 2
        assert vehicle.seat_status == "works"
        assert not hasattr(vehicle, "doors")
        assert vehicle.registration.registration_id.startswith("MOTORCYCLE-")

    def test_minivan_default_door_config(self, service):
        vehicle = service.create_vehicle(
            MiniVanInput(nickname="Van", mileage=1, doors=4), []
        ).value
        assert isinstance(vehicle, MiniVan)
        assert [d.sliding for d in vehicle.door_config] == [False, False, True, True]
        assert vehicle.registration.registration_id.startswith("MINIVAN-")

    def test_minivan_door_config_follows_doors(self, service):
        vehicle = service.create_vehicle(
            MiniVanInput(nickname="Van", mileage=1, doors=2), []
        ).value
        assert [d.sliding for d in vehicle.door_config] == [False, False]

    def test_minivan_explicit_door_config(self, service):
        vehicle = service.create_vehicle(
            MiniVanInput(
                nickname="Van",
                mileage=1,
                doors=2,
                door_config=[{"sliding": True}, {"sliding": True}],
            ),
            [],
        ).value
        assert [d.sliding for d in vehicle.door_config] == [True, True]

    def test_minivan_door_config_mismatch(self, service):
        result = service.create_vehicle(
            MiniVanInput(nickname="Van", mileage=1, doors=3, door_config=[{"sliding": True}]),
            [],
        )
        assert not result.ok
        assert result.error.code == ErrorCode.VALIDATION_ERROR
        assert "doorConfig" in result.error.field_errors

    def test_explicit_fields_kept(self, service):
        vehicle = service.create_vehicle(
            SedanInput(nickname="S", mileage=1, wheels=3, doors=0, engine_status="junk"),
            [],
        ).value
        assert vehicle.wheels == 3
        assert vehicle.doors == 0
        assert vehicle.engine_status == "junk"

    def test_nickname_trimmed(self, service):
        vehicle = service.create_vehicle(SedanInput(nickname="  Spaced  ", mileage=1), []).value
        assert vehicle.nickname == "Spaced"

    def test_duplicate_nickname_case_insensitive(self, service):
        first = service.create_vehicle(SedanInput(nickname="Dup", mileage=1), []).value
        result = service.create_vehicle(CoupeInput(nickname="DUP", mileage=1), [first])
        assert not result.ok
        assert result.error.code == ErrorCode.NICKNAME_TAKEN
        assert result.error.field_errors == {"nickname": "This nickname is already in use"}
        assert 'nickname "DUP" already exists' in result.error.message

    def test_duplicate_nickname_trim_insensitive(self, service, sedan):
        result = service.create_vehicle(SedanInput(nickname=" test sedan ", mileage=1), [sedan])
        assert result.error.code == ErrorCode.NICKNAME_TAKEN

    def test_unique_nickname_succeeds(self, service, fleet):
        result = service.create_vehicle(SedanInput(nickname="Fresh", mileage=1), fleet)
        assert result.ok

    def test_does_not_modify_existing(self, service, fleet):
        before = list(fleet)
        service.create_vehicle(SedanInput(nickname="Fresh", mileage=1), fleet)
        assert fleet == before

    def test_mapping_input(self, service):
        result = service.create_vehicle(
            {"type": "coupe", "nickname": "Raw", "mileage": 10, "engineStatus": "fixable"},
            [],
        )
        assert result.ok
        assert result.value.engine_status == "fixable"

    def test_invalid_mapping_input(self, service):
        result = service.create_vehicle(
            {"type": "coupe", "nickname": "Raw", "mileage": -5}, []
        )
        assert not result.ok
        assert result.error.code == ErrorCode.VALIDATION_ERROR
        assert "mileage" in result.error.field_errors

    def test_legacy_policy_failed_registration(self):
        service = VehicleService(policy=RegistrationPolicy.legacy())
        vehicle = service.create_vehicle(
            SedanInput(nickname="Old", mileage=150_000), []
        ).value
        assert vehicle.registration.status == "failed"
        assert "150,000" in vehicle.registration.registration_error

    def test_custom_id_factory(self):
        service = VehicleService(id_factory=lambda: "00000000-0000-4000-8000-000000000001")
        vehicle = service.create_vehicle(SedanInput(nickname="S", mileage=1), []).value
        assert vehicle.id == "00000000-0000-4000-8000-000000000001"


class TestUpdateVehicle:
    @pytest.fixture
    def later_service(self):
        return VehicleService(clock=lambda: LATER)

    def test_updates_fields(self, later_service, sedan):
        result = later_service.update_vehicle(
            sedan.id,
            SedanInput(nickname="Renamed", mileage=60000, engine_status="fixable"),
            [sedan],
        )
        assert result.ok
        updated = result.value
        assert updated.nickname == "Renamed"
        assert updated.mileage == 60000
        assert updated.engine_status == "fixable"
        assert updated.updated_at == LATER

    def test_preserves_identity_fields(self, later_service, sedan):
        updated = later_service.update_vehicle(
            sedan.id, SedanInput(nickname="Renamed", mileage=1), [sedan]
        ).value
        assert updated.id == sedan.id
        assert updated.created_at == sedan.created_at
        assert updated.registration == sedan.registration

    def test_registration_not_recomputed_under_policy(self, motorcycle):
        service = VehicleService(policy=RegistrationPolicy.legacy())
        updated = service.update_vehicle(
            motorcycle.id, MotorcycleInput(nickname="Bike", mileage=1), [motorcycle]
        ).value
        assert updated.registration.status == "failed"
        assert updated.registration == motorcycle.registration

    def test_omitted_fields_keep_existing_values(self, service, motorcycle):
        updated = service.update_vehicle(
            motorcycle.id, MotorcycleInput(nickname="Bike", mileage=1), [motorcycle]
        ).value
        # Existing values, not the type defaults
        assert updated.engine_status == "junk"
        assert updated.seat_status == "fixable"
        assert updated.wheels == 2

    def test_minivan_keeps_door_config(self, service, minivan):
        updated = service.update_vehicle(
            minivan.id, MiniVanInput(nickname="Family Van", mileage=80000), [minivan]
        ).value
        assert updated.doors == 3
        assert updated.door_config == minivan.door_config

    def test_minivan_doors_without_config_rejected(self, service, minivan):
        result = service.update_vehicle(
            minivan.id, MiniVanInput(nickname="Family Van", mileage=1, doors=4), [minivan]
        )
        assert not result.ok
        assert result.error.code == ErrorCode.VALIDATION_ERROR
        assert "doorConfig" in result.error.field_errors

    def test_minivan_doors_and_config(self, service, minivan):
        updated = service.update_vehicle(
            minivan.id,
            MiniVanInput(
                nickname="Family Van",
                mileage=1,
                doors=1,
                door_config=[{"sliding": True}],
            ),
            [minivan],
        ).value
        assert updated.doors == 1
        assert [d.sliding for d in updated.door_config] == [True]

    def test_not_found(self, service, sedan):
        result = service.update_vehicle(
            "00000000-0000-4000-8000-000000000000",
            SedanInput(nickname="x", mileage=1),
            [sedan],
        )
        assert result.error.code == ErrorCode.VEHICLE_NOT_FOUND
        assert "00000000-0000-4000-8000-000000000000" in result.error.message

    def test_cannot_change_type(self, service, sedan):
        result = service.update_vehicle(
            sedan.id, CoupeInput(nickname="Test Sedan", mileage=1), [sedan]
        )
        assert not result.ok
        assert result.error.code == ErrorCode.CANNOT_CHANGE_TYPE
        assert result.error.message == 'Cannot change vehicle type from "sedan" to "coupe"'

    def test_type_change_leaves_collection_unchanged(self, service, fleet, sedan):
        before = [v.model_copy() for v in fleet]
        service.update_vehicle(sedan.id, CoupeInput(nickname="x", mileage=1), fleet)
        assert fleet == before

    def test_keeping_own_nickname_allowed(self, service, sedan, motorcycle):
        result = service.update_vehicle(
            sedan.id, SedanInput(nickname="TEST SEDAN", mileage=1), [sedan, motorcycle]
        )
        assert result.ok
        assert result.value.nickname == "TEST SEDAN"

    def test_nickname_taken_by_other(self, service, sedan, motorcycle):
        result = service.update_vehicle(
            sedan.id, SedanInput(nickname=" bike", mileage=1), [sedan, motorcycle]
        )
        assert result.error.code == ErrorCode.NICKNAME_TAKEN
        assert result.error.field_errors["nickname"] == "This nickname is already in use"

    def test_mapping_input(self, service, sedan):
        result = service.update_vehicle(
            sedan.id, {"type": "sedan", "nickname": "Mapped", "mileage": 2}, [sedan]
        )
        assert result.value.nickname == "Mapped"

    def test_not_found_checked_before_input(self, service):
        result = service.update_vehicle("missing", {"type": "sedan"}, [])
        assert result.error.code == ErrorCode.VEHICLE_NOT_FOUND


class TestDeleteVehicle:
    def test_removes_vehicle(self, service, fleet, sedan):
        result = service.delete_vehicle(sedan.id, fleet)
        assert result.ok
        assert sedan not in result.value
        assert len(result.value) == 2

    def test_input_list_untouched(self, service, fleet, sedan):
        before = list(fleet)
        service.delete_vehicle(sedan.id, fleet)
        assert fleet == before

    def test_not_found(self, service, fleet):
        before = list(fleet)
        result = service.delete_vehicle("nope", fleet)
        assert not result.ok
        assert result.error.code == ErrorCode.VEHICLE_NOT_FOUND
        assert fleet == before

    def test_last_vehicle(self, service, sedan):
        assert service.delete_vehicle(sedan.id, [sedan]).value == []
