"""
Tests for the wizard step validation rules.
"""

import pytest
from pydantic import ValidationError

from estimator.schemas.wizard import (
    ComplexityStepForm,
    ProjectSendEstimateForm,
    ProjectSendEstimateWithClientForm,
    RoomForm,
    RoomsStepForm,
    SendEstimateForm,
    TemplateStepForm,
    TradeSelectionForm,
    validate_email_address,
)


def _messages(exc: pytest.ExceptionInfo) -> list[str]:
    return [error["msg"] for error in exc.value.errors()]


def test_send_form_requires_name_and_email() -> None:
    with pytest.raises(ValidationError) as exc:
        SendEstimateForm(homeowner_name=" ", homeowner_email="")
    assert _messages(exc) == ["Value error, Name is required", "Value error, Email is required"]


def test_send_form_rejects_bad_email() -> None:
    with pytest.raises(ValidationError) as exc:
        SendEstimateForm(homeowner_name="Jane", homeowner_email="jane@")
    assert _messages(exc) == ["Value error, Please enter a valid email"]


def test_send_form_strips_values() -> None:
    form = SendEstimateForm(homeowner_name="  Jane ", homeowner_email=" jane@example.com ")
    assert form.homeowner_name == "Jane"
    assert form.homeowner_email == "jane@example.com"


def test_template_step_requires_template() -> None:
    with pytest.raises(ValidationError) as exc:
        TemplateStepForm(template_id="")
    assert _messages(exc) == ["Value error, Please select a template"]
    assert TemplateStepForm(template_id=5).template_id == "5"


def test_complexity_step_levels() -> None:
    assert ComplexityStepForm(complexity="complex").complexity == "complex"
    with pytest.raises(ValidationError):
        ComplexityStepForm(complexity="extreme")


def test_project_forms_require_project_name() -> None:
    with pytest.raises(ValidationError) as exc:
        ProjectSendEstimateWithClientForm(project_name="")
    assert _messages(exc) == ["Value error, Project name is required"]

    form = ProjectSendEstimateForm(project_name="Remodel", homeowner_name="Jane", homeowner_email="jane@example.com")
    assert form.project_name == "Remodel"


def test_trade_selection_needs_one_supported_trade() -> None:
    with pytest.raises(ValidationError):
        TradeSelectionForm(enabled_trades=[])
    with pytest.raises(ValidationError):
        TradeSelectionForm(enabled_trades=["framing"])
    assert TradeSelectionForm(enabled_trades=["painting"]).enabled_trades == ["painting"]


def test_room_form_dimensions() -> None:
    """Test that rooms need a name and at least one foot per dimension."""
    with pytest.raises(ValidationError) as exc:
        RoomForm(name="", length_feet=0, width_feet=10, height_feet=8, height_inches=12)
    fields = [error["loc"][0] for error in exc.value.errors()]
    assert fields == ["name", "length_feet", "height_inches"]

    with pytest.raises(ValidationError):
        RoomsStepForm(rooms=[])


def test_validate_email_address() -> None:
    assert validate_email_address("jane@example.com") == "jane@example.com"
    with pytest.raises(ValueError, match="Please enter a valid email"):
        validate_email_address("jane")
