from __future__ import annotations

from domain.catalog import DEFAULT_CATALOG, UNKNOWN_SERVICE_ID
from domain.models import BORDER_DASHED, BORDER_DOTTED, BORDER_SOLID, ServiceNode


def test_label_lookup_wins_over_icon() -> None:
    service = DEFAULT_CATALOG.classify_node("Lambda", "aws-rds")

    assert service.service_id == "lambda"
    assert service.category == "Compute"


def test_icon_lookup_used_for_unknown_label() -> None:
    service = DEFAULT_CATALOG.classify_node("Orders DB", " aws-rds ")

    assert service.service_id == "rds"
    assert service.name == "RDS"


def test_unclassified_service_keeps_label() -> None:
    service = DEFAULT_CATALOG.classify_node("Mainframe", "ibm-z")

    assert service.service_id == UNKNOWN_SERVICE_ID
    assert service.name == "Mainframe"
    assert service.category == "Other"


def test_group_classification_first_keyword_wins() -> None:
    assert DEFAULT_CATALOG.classify_group("VPC private subnet").border_style == BORDER_SOLID
    assert DEFAULT_CATALOG.classify_group("AWS Cloud").color == "#FF9900"
    assert DEFAULT_CATALOG.classify_group("Private subnet").border_style == BORDER_DASHED
    assert DEFAULT_CATALOG.classify_group("Rack 12").border_style == BORDER_DOTTED
    fallback = DEFAULT_CATALOG.classify_group("Misc")
    assert fallback.color == "#FF6B6B"
    assert fallback.border_style == BORDER_SOLID


def test_export_icons() -> None:
    node = ServiceNode(id="rds-1", name="RDS")

    assert DEFAULT_CATALOG.icon_for("Lambda") == "aws-lambda"
    assert DEFAULT_CATALOG.icon_for("Something else") == "aws-ec2"
    assert DEFAULT_CATALOG.group_icon("AWS Cloud") == "aws-cloud"
    assert DEFAULT_CATALOG.group_icon("Backend", node) == "aws-rds"
    assert DEFAULT_CATALOG.group_icon("Backend") == "aws-vpc"
