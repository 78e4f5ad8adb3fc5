from __future__ import annotations

import base64
import json

import pytest
from lzstring import LZString  # type: ignore[import-untyped]

from adapters.sharing.lz_codec import (
    build_share_link,
    check_size_budget,
    compare_compression,
    compress,
    decompress,
    dump_payload,
    encode_legacy,
    ensure_link_length,
    parse_share_link,
)
from domain.errors import EncodingError, GenerationError, ShareLinkTooLongError
from domain.models import Diagram, ServiceNode
from tests.helpers.diagram_fixtures import service


def _large_diagram(count: int) -> Diagram:
    return Diagram.model_validate(
        {
            "boardItems": [
                service(f"svc-{index}", "EC2", index * 80, index * 80, customName=f"Worker {index}")
                for index in range(count)
            ]
        }
    )


def test_single_node_round_trip_resolves_display_name() -> None:
    diagram = Diagram(nodes=[ServiceNode(id="ec2-1", name="EC2")])

    restored = decompress(compress(diagram))

    assert restored is not None
    assert restored.nodes[0].id == "ec2-1"
    assert restored.nodes[0].display_name == "EC2"


def test_round_trip_preserves_diagram(nested_diagram: Diagram) -> None:
    assert decompress(compress(nested_diagram)) == nested_diagram


def test_compressed_text_is_url_safe(nested_diagram: Diagram) -> None:
    encoded = compress(nested_diagram)

    assert all(char.isalnum() or char in "+-$" for char in encoded)


def test_compress_missing_diagram_raises() -> None:
    with pytest.raises(EncodingError):
        compress(None)


@pytest.mark.parametrize("text", [None, "", "   ", "not-a-payload!!"])
def test_decompress_invalid_input_returns_none(text: str | None) -> None:
    assert decompress(text) is None


def test_decompress_rejects_non_diagram_json() -> None:
    encoded = LZString().compressToEncodedURIComponent(json.dumps([1, 2, 3]))

    assert decompress(encoded) is None


def test_legacy_payload_needs_fallback(nested_diagram: Diagram) -> None:
    legacy = encode_legacy(nested_diagram)

    assert decompress(legacy) is None
    assert decompress(legacy, allow_legacy_fallback=True) == nested_diagram


def test_legacy_payload_survives_plus_to_space_mangling(nested_diagram: Diagram) -> None:
    legacy = encode_legacy(nested_diagram).replace("+", " ")

    assert decompress(legacy, allow_legacy_fallback=True) == nested_diagram


def test_share_link_round_trip(nested_diagram: Diagram) -> None:
    url = build_share_link(nested_diagram, "https://boards.example.com/")

    assert url.startswith("https://boards.example.com/?data=")
    assert parse_share_link(url) == nested_diagram


def test_share_link_accepts_legacy_data(nested_diagram: Diagram) -> None:
    url = f"https://boards.example.com/?data={encode_legacy(nested_diagram)}"

    assert parse_share_link(url) == nested_diagram


def test_share_link_without_data() -> None:
    assert parse_share_link("https://boards.example.com/?view=1") is None


def test_share_link_generation_failure_is_wrapped() -> None:
    with pytest.raises(GenerationError):
        build_share_link(None, "https://boards.example.com/")


def test_link_length_limit() -> None:
    url = "https://boards.example.com/?data=" + "A" * 2000

    with pytest.raises(ShareLinkTooLongError) as excinfo:
        ensure_link_length(url, 2000)

    assert excinfo.value.length == len(url)
    assert ensure_link_length("https://x.example/", 2000) == "https://x.example/"


def test_size_budget_for_fifty_nodes() -> None:
    diagram = _large_diagram(50)
    compressed_kb = len(compress(diagram)) / 1024

    report = check_size_budget(diagram, 20)

    assert report.within_budget is (compressed_kb <= 20)
    assert report.max_size_kb == 20
    assert report.compressed_size_kb == round(compressed_kb, 2)


def test_size_budget_exceeded() -> None:
    report = check_size_budget(_large_diagram(50), 0.01)

    assert not report.within_budget
    assert "exceeds" in report.message


def test_compression_beats_plain_json() -> None:
    diagram = _large_diagram(50)

    stats = compare_compression(diagram)

    assert stats.lz_string <= len(dump_payload(diagram.to_wire()))
    assert stats.lz_string < stats.base64
    assert stats.improvement > 0


def _lz(payload: object) -> str:
    return LZString().compressToEncodedURIComponent(json.dumps(payload))


@pytest.mark.parametrize(
    "payload",
    [
        {"version": "1.0", "boardItems": [], "containers": [], "connections": [], "settings": "x"},
        {"version": "1.0", "boardItems": [], "containers": [], "connections": [], "settings": [1]},
        {"version": "1.0", "boardItems": [1], "containers": [], "connections": []},
        {"version": "1.0", "boardItems": "abc", "containers": [], "connections": []},
    ],
)
def test_decompress_malformed_payload_returns_none(payload: dict) -> None:
    assert decompress(_lz(payload)) is None


def test_decompress_requires_all_collections() -> None:
    legacy = base64.b64encode(b'{"v":1}').decode("ascii")

    assert decompress(legacy, allow_legacy_fallback=True) is None
    assert decompress(_lz({"version": "1.0", "boardItems": []})) is None


def test_decompress_deeply_nested_json_returns_none() -> None:
    nested = "[" * 100000 + "]" * 100000

    assert decompress(LZString().compressToEncodedURIComponent(nested)) is None
    assert decompress(nested, allow_legacy_fallback=True) is None
