"""Tests for asset maintenance, repairs and value adjustments."""

from datetime import date

from app.config import settings
from app.schemas.asset import (
    AssetMaintenanceCreate,
    AssetRepairCreate,
    ValueAdjustmentCreate,
    ValueAdjustmentUpdate,
)
from app.services.asset.upkeep import (
    asset_maintenances,
    asset_repairs,
    maintenance_task_end,
    value_adjustments,
)


def _echo_insert(name):
    return lambda doc: {**doc, "name": name}


class TestMaintenanceTaskEnd:
    def test_completed_work_ends_next_day(self):
        payload = AssetMaintenanceCreate(
            asset="AST-1",
            maintenance_date=date(2024, 3, 31),
            next_maintenance_date=date(2024, 6, 30),
            status="Completed",
        )
        assert maintenance_task_end(payload) == date(2024, 4, 1)

    def test_scheduled_work_runs_until_next_maintenance(self):
        payload = AssetMaintenanceCreate(
            asset="AST-1", maintenance_date=date(2024, 3, 1), next_maintenance_date=date(2024, 6, 1)
        )
        assert maintenance_task_end(payload) == date(2024, 6, 1)

    def test_scheduled_work_without_next_date_gets_thirty_days(self):
        payload = AssetMaintenanceCreate(asset="AST-1", maintenance_date=date(2024, 3, 1))
        assert maintenance_task_end(payload) == date(2024, 3, 31)


class TestAssetMaintenances:
    def test_create_fills_defaults_and_task(self, erp):
        erp.insert.side_effect = _echo_insert("MAINT-1")

        maintenance = asset_maintenances.create(
            erp, AssetMaintenanceCreate(asset="AST-1", maintenance_date=date(2024, 3, 1), assign_to="tech@acme.et")
        )

        doc = erp.insert.call_args.args[0]
        assert doc["doctype"] == "Asset Maintenance"
        assert doc["status"] == "Scheduled"
        assert doc["maintenance_team"] == settings.maintenance_team
        assert "next_maintenance_date" not in doc
        task = doc["asset_maintenance_tasks"][0]
        assert task["maintenance_task"] == "General Maintenance"
        assert task["maintenance_status"] == "Planned"
        assert task["start_date"] == "2024-03-01"
        assert task["end_date"] == "2024-03-31"
        assert task["assign_to"] == "tech@acme.et"
        assert maintenance.name == "MAINT-1"

    def test_completed_maintenance_task(self, erp):
        erp.insert.side_effect = _echo_insert("MAINT-2")

        asset_maintenances.create(
            erp,
            AssetMaintenanceCreate(
                asset="AST-1",
                maintenance_date=date(2024, 3, 1),
                status="Completed",
                maintenance_team="Fleet Crew",
            ),
        )

        doc = erp.insert.call_args.args[0]
        assert doc["maintenance_team"] == "Fleet Crew"
        task = doc["asset_maintenance_tasks"][0]
        assert task["maintenance_status"] == "Completed"
        assert task["end_date"] == "2024-03-02"

    def test_explicit_tasks_are_sent_as_given(self, erp):
        erp.insert.side_effect = _echo_insert("MAINT-3")

        asset_maintenances.create(
            erp,
            AssetMaintenanceCreate(
                asset="AST-1",
                maintenance_date=date(2024, 3, 1),
                asset_maintenance_tasks=[{"maintenance_task": "Oil change", "start_date": "2024-03-01"}],
            ),
        )

        tasks = erp.insert.call_args.args[0]["asset_maintenance_tasks"]
        assert tasks == [{"maintenance_task": "Oil change", "start_date": "2024-03-01"}]


class TestAssetRepairs:
    def test_completed_repair_defaults_completion_date(self, erp):
        erp.insert.side_effect = _echo_insert("REP-1")

        repair = asset_repairs.create(
            erp,
            AssetRepairCreate(
                asset="AST-1",
                failure_date=date(2024, 2, 27),
                repair_date=date(2024, 3, 2),
                status="Completed",
            ),
        )

        doc = erp.insert.call_args.args[0]
        assert doc["completion_date"] == "2024-03-02"
        assert repair.completion_date == date(2024, 3, 2)

    def test_explicit_completion_date_kept(self, erp):
        erp.insert.side_effect = _echo_insert("REP-2")

        asset_repairs.create(
            erp,
            AssetRepairCreate(
                asset="AST-1",
                failure_date=date(2024, 2, 27),
                repair_date=date(2024, 3, 2),
                completion_date=date(2024, 3, 5),
                status="Completed",
            ),
        )

        assert erp.insert.call_args.args[0]["completion_date"] == "2024-03-05"

    def test_open_repair_has_no_completion_date(self, erp):
        erp.insert.side_effect = _echo_insert("REP-3")

        asset_repairs.create(
            erp, AssetRepairCreate(asset="AST-1", failure_date=date(2024, 2, 27), repair_date=date(2024, 3, 2))
        )

        doc = erp.insert.call_args.args[0]
        assert doc["status"] == "Reported"
        assert "completion_date" not in doc


class TestValueAdjustments:
    def test_create_computes_difference(self, erp):
        erp.insert.side_effect = _echo_insert("AVA-1")

        adjustment = value_adjustments.create(
            erp,
            ValueAdjustmentCreate(
                asset="AST-1",
                date=date(2024, 4, 1),
                current_asset_value=1000,
                new_asset_value=800,
                company="Acme",
            ),
        )

        doc = erp.insert.call_args.args[0]
        assert doc["difference_amount"] == -200
        assert doc["date"] == "2024-04-01"
        assert adjustment.current_value == 1000
        assert adjustment.new_value == 800
        assert adjustment.difference_amount == -200

    def test_update_recomputes_difference_from_stored_value(self, erp):
        erp.get_doc.return_value = {
            "name": "AVA-1",
            "current_asset_value": 1000,
            "new_asset_value": 800,
            "difference_amount": -200,
        }
        erp.save.side_effect = lambda doc: doc

        adjustment = value_adjustments.update(erp, "AVA-1", ValueAdjustmentUpdate(new_asset_value=1250))

        saved = erp.save.call_args.args[0]
        assert saved["new_asset_value"] == 1250
        assert saved["difference_amount"] == 250
        assert adjustment.difference_amount == 250

    def test_update_without_new_value_keeps_difference(self, erp):
        erp.get_doc.return_value = {"name": "AVA-1", "current_asset_value": 1000, "difference_amount": -200}
        erp.save.side_effect = lambda doc: doc

        value_adjustments.update(erp, "AVA-1", ValueAdjustmentUpdate(reason="Revaluation"))

        saved = erp.save.call_args.args[0]
        assert saved["reason"] == "Revaluation"
        assert saved["difference_amount"] == -200
