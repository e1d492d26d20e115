"""Tests for asset movement validation and the movement service."""

from datetime import date

import pytest
from fastapi import HTTPException
from pydantic import ValidationError

from app.schemas.asset import AssetMovementCreate, AssetMovementUpdate
from app.services.asset.movements import asset_movements
from app.services.erpnext.client import ERPNextError
from app.validators.asset_movement import validate_asset_movement


class TestValidateAssetMovement:
    def test_valid_transfer(self):
        validate_asset_movement(
            "Transfer", [{"asset": "AST-1", "from_location": "HQ", "to_location": "Branch"}]
        )

    def test_valid_issue_and_receipt(self):
        validate_asset_movement("Issue", [{"asset": "AST-1", "from_location": "HQ", "to_employee": "EMP-1"}])
        validate_asset_movement("Receipt", [{"asset": "AST-1", "from_employee": "EMP-1", "to_location": "HQ"}])

    def test_missing_purpose(self):
        with pytest.raises(ValueError, match="Movement purpose is required"):
            validate_asset_movement("", [{"asset": "AST-1"}])

    def test_unknown_purpose(self):
        with pytest.raises(ValueError, match="Purpose must be one of: Issue, Receipt, Transfer"):
            validate_asset_movement("Disposal", [{"asset": "AST-1"}])

    def test_empty_assets(self):
        with pytest.raises(ValueError, match="At least one asset is required"):
            validate_asset_movement("Transfer", [])

    def test_line_without_asset(self):
        with pytest.raises(ValueError, match="Each asset must have an asset ID"):
            validate_asset_movement("Transfer", [{"from_location": "HQ", "to_location": "Branch"}])

    def test_issue_to_location_rejected(self):
        with pytest.raises(ValueError, match="cannot issue to a location"):
            validate_asset_movement(
                "Issue",
                [{"asset": "AST-1", "from_location": "HQ", "to_employee": "EMP-1", "to_location": "Branch"}],
            )

    def test_receipt_requires_from_employee(self):
        with pytest.raises(ValueError, match="For Receipt purpose, from_employee is required"):
            validate_asset_movement("Receipt", [{"asset": "AST-1", "to_location": "HQ"}])

    def test_transfer_with_employee_rejected(self):
        with pytest.raises(ValueError, match="cannot use employee fields"):
            validate_asset_movement(
                "Transfer",
                [{"asset": "AST-1", "from_location": "HQ", "to_location": "Branch", "to_employee": "EMP-1"}],
            )

    def test_second_line_checked(self):
        lines = [
            {"asset": "AST-1", "from_location": "HQ", "to_location": "Branch"},
            {"asset": "AST-2", "from_location": "HQ"},
        ]
        with pytest.raises(ValueError, match="to_location is required"):
            validate_asset_movement("Transfer", lines)

    def test_schema_runs_validator(self):
        with pytest.raises(ValidationError, match="For Issue purpose"):
            AssetMovementCreate(
                purpose="Issue",
                movement_date=date(2024, 3, 1),
                assets=[{"asset": "AST-1", "from_location": "HQ"}],
            )


def _transfer(**overrides):
    values = {
        "purpose": "Transfer",
        "movement_date": date(2024, 3, 1),
        "company": "Acme",
        "assets": [{"asset": "AST-1", "from_location": "HQ", "to_location": "Branch"}],
    }
    values.update(overrides)
    return AssetMovementCreate(**values)


class TestAssetMovementService:
    def test_create_submits_draft_asset_first(self, erp):
        erp.get_doc.return_value = {"name": "AST-1", "docstatus": 0}
        erp.insert.return_value = {
            "name": "MOV-1",
            "purpose": "Transfer",
            "assets": [{"asset": "AST-1", "source_location": "HQ", "target_location": "Branch"}],
        }

        movement = asset_movements.create(erp, _transfer())

        erp.submit.assert_called_once_with({"doctype": "Asset", "name": "AST-1"})
        doc = erp.insert.call_args.args[0]
        assert doc["doctype"] == "Asset Movement"
        assert doc["status"] == "Draft"
        assert doc["assets"][0]["source_location"] == "HQ"
        assert doc["assets"][0]["target_location"] == "Branch"
        assert movement.asset == "AST-1"
        assert movement.from_location == "HQ"
        assert movement.to_location == "Branch"

    def test_submitted_asset_is_not_resubmitted(self, erp):
        erp.get_doc.return_value = {"name": "AST-1", "docstatus": 1}
        erp.insert.return_value = {"name": "MOV-1", "assets": []}

        asset_movements.create(erp, _transfer())

        erp.submit.assert_not_called()

    def test_missing_asset_is_404(self, serve_documents):
        erp = serve_documents({"Asset": []})

        with pytest.raises(HTTPException) as excinfo:
            asset_movements.create(erp, _transfer())

        assert excinfo.value.status_code == 404
        assert excinfo.value.detail == "Asset AST-1 does not exist"
        erp.insert.assert_not_called()

    def test_failed_auto_submit_is_400(self, erp):
        erp.get_doc.return_value = {"name": "AST-1", "docstatus": 0}
        erp.submit.side_effect = ERPNextError("Depreciation schedule missing", status_code=417)

        with pytest.raises(HTTPException) as excinfo:
            asset_movements.create(erp, _transfer())

        assert excinfo.value.status_code == 400
        assert "cannot be submitted automatically" in excinfo.value.detail
        erp.insert.assert_not_called()

    def test_update_validates_against_stored_purpose(self, erp):
        erp.get_doc.return_value = {
            "name": "MOV-1",
            "purpose": "Issue",
            "assets": [{"asset": "AST-1", "source_location": "HQ", "to_employee": "EMP-1"}],
        }
        payload = AssetMovementUpdate(assets=[{"asset": "AST-1", "from_location": "HQ", "to_location": "Branch"}])

        with pytest.raises(HTTPException) as excinfo:
            asset_movements.update(erp, "MOV-1", payload)

        assert excinfo.value.status_code == 400
        erp.save.assert_not_called()

    def test_update_complete_payload_rejected_before_read(self, erp):
        payload = AssetMovementUpdate(purpose="Receipt", assets=[{"asset": "AST-1", "to_location": "HQ"}])

        with pytest.raises(HTTPException):
            asset_movements.update(erp, "MOV-1", payload)

        erp.get_doc.assert_not_called()

    def test_update_status_only(self, erp):
        stored = {
            "name": "MOV-1",
            "purpose": "Transfer",
            "assets": [{"asset": "AST-1", "source_location": "HQ", "target_location": "Branch"}],
        }
        erp.get_doc.return_value = stored
        erp.save.side_effect = lambda doc: doc

        movement = asset_movements.update(erp, "MOV-1", AssetMovementUpdate(status="Completed"))

        saved = erp.save.call_args.args[0]
        assert saved["status"] == "Completed"
        assert saved["assets"] == stored["assets"]
        assert movement.status == "Completed"
