from __future__ import annotations

import pytest

from domain.models import Diagram
from domain.services.export_diagram import export_diagram
from domain.services.parse_eraser_dsl import EraserDslParser
from tests.helpers.diagram_fixtures import container, fixed_clock, service

EXPECTED_ERASER = """direction right

user_1 [label: "User", icon: user]

cloud [label: "AWS Cloud", icon: aws-cloud] {
  vpc [label: "VPC", icon: aws-ec2] {
    ec2_1 [label: "Web", icon: aws-ec2]
    rds_1 [label: "RDS", icon: aws-rds]
  }
}

// Connections
user_1 > ec2_1 : "HTTPS"
ec2_1 > rds_1
"""


def test_eraser_export_nests_blocks(nested_diagram: Diagram) -> None:
    assert export_diagram(nested_diagram) == EXPECTED_ERASER


def test_group_block_brackets_its_node() -> None:
    text = 'net [label: "Network", icon: aws-vpc] {\n  web [label: "EC2", icon: aws-ec2]\n}'
    diagram = EraserDslParser(clock=fixed_clock).parse(text)

    lines = export_diagram(diagram).splitlines()
    group_id = diagram.groups[0].id.replace("-", "_")
    node_id = diagram.nodes[0].id.replace("-", "_")
    open_index = next(i for i, line in enumerate(lines) if line.startswith(f"{group_id} ["))
    node_index = next(i for i, line in enumerate(lines) if line.strip().startswith(f"{node_id} ["))
    close_index = next(i for i, line in enumerate(lines) if line == "}")

    assert open_index < node_index < close_index


def test_eraser_export_reparses_to_same_structure(nested_diagram: Diagram) -> None:
    reparsed = EraserDslParser(clock=fixed_clock).parse(export_diagram(nested_diagram))

    assert len(reparsed.nodes) == len(nested_diagram.nodes)
    assert [group.name for group in reparsed.groups] == ["AWS Cloud", "VPC"]
    assert reparsed.groups[1].parent_container_id == reparsed.groups[0].id
    assert [connection.label for connection in reparsed.connections] == ["HTTPS", ""]


def test_flowchart_export(nested_diagram: Diagram) -> None:
    output = export_diagram(nested_diagram, "flowchart")
    lines = output.splitlines()

    assert lines[0] == "flowchart TD"
    assert '    user_1["User"]' in lines
    assert '    subgraph cloud["AWS Cloud"]' in lines
    assert '        subgraph vpc["VPC"]' in lines
    assert '            ec2_1["Web"]' in lines
    assert lines.index('        subgraph vpc["VPC"]') < lines.index("        end")
    assert '    user_1 -->|"HTTPS"| ec2_1' in lines
    assert "    ec2_1 --> rds_1" in lines
    assert "    style rds_1 fill:#FF9900,stroke:#333,stroke-width:2px,color:#fff" in lines
    assert output.endswith("\n")


def test_every_group_emitted_once_despite_parent_loop() -> None:
    diagram = Diagram.model_validate(
        {
            "boardItems": [service("n", "EC2", 0, 0, parent="x")],
            "containers": [
                container("x", "X", 0, 0, 10, 10, parent="y"),
                container("y", "Y", 0, 0, 10, 10, parent="x"),
                container("z", "Z", 0, 0, 10, 10, parent="missing"),
            ],
        }
    )

    lines = export_diagram(diagram).splitlines()

    for ident in ("x", "y", "z"):
        assert sum(1 for line in lines if line.strip().startswith(f"{ident} [")) == 1
    assert sum(1 for line in lines if line.strip() == "}") == 3


def test_unknown_export_format() -> None:
    with pytest.raises(ValueError, match="Unsupported export format"):
        export_diagram(Diagram(), "plantuml")
