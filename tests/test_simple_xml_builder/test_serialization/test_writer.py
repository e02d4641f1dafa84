"""Tests for depth-first serialization of element trees."""

import io
import logging
import threading
from typing import List

import pytest
from lxml import etree

from simple_xml_builder.serialization import XMLWriter, format_attributes, write_document
from simple_xml_builder.shared.errors import XMLWriteError
from simple_xml_builder.tree import XMLElement

DECLARATION = '<?xml version = "1.0" encoding = "UTF-8"?>\n'

EXPECTED_DOCUMENT = """<?xml version = "1.0" encoding = "UTF-8"?>
<root>
\t<child1>
\t\t<inner />
\t\t<inner>Example Text
New line</inner>
\t</child1>
\t<child2 at1="test &amp;" at2="test &lt;" at3="test &quot;">
\t\t<inner test="example" />
\t</child2>
\t<child3>&amp;&lt; &amp;</child3>
\t<child4 non-str-attribute="5">6</child4>
</root>
"""


def build_example_tree() -> XMLElement:
    """Build the reference document used across serialization tests."""
    root = XMLElement("root")
    child1 = XMLElement("child1")
    inner1 = XMLElement("inner")
    child1.add_child(inner1)
    inner2 = XMLElement("inner")
    inner2.add_text("Example Text\nNew line")
    child1.add_child(inner2)
    root.add_child(child1)
    child2 = XMLElement("child2")
    child2.add_attribute("at1", "test &")
    child2.add_attribute("at2", "test <")
    child2.add_attribute("at3", 'test "')
    inner3 = XMLElement("inner")
    inner3.add_attribute("test", "example")
    child2.add_child(inner3)
    root.add_child(child2)
    child3 = XMLElement("child3")
    child3.add_text("&< &")
    root.add_child(child3)
    child4 = XMLElement("child4")
    child4.add_attribute("non-str-attribute", 5)
    child4.add_text(6)
    root.add_child(child4)
    return root


class FailingSink:
    """Binary sink that fails after a number of successful writes."""

    def __init__(self, fail_after: int) -> None:
        self.fail_after = fail_after
        self.chunks: List[bytes] = []

    def write(self, data: bytes) -> int:
        if len(self.chunks) >= self.fail_after:
            raise OSError(28, "No space left on device")
        self.chunks.append(data)
        return len(data)


class TestWriteDocument:
    """Test complete document output."""

    def test_reference_document(self) -> None:
        """Test the reference tree serializes to the exact expected text."""
        assert str(build_example_tree()) == EXPECTED_DOCUMENT

    def test_write_to_binary_sink(self) -> None:
        """Test write() emits UTF-8 bytes to the sink."""
        sink = io.BytesIO()

        build_example_tree().write(sink)

        assert sink.getvalue() == EXPECTED_DOCUMENT.encode("utf-8")

    def test_write_to_file(self, tmp_path) -> None:
        """Test writing to a file opened in binary mode."""
        path = tmp_path / "out.xml"

        with path.open("wb") as f:
            write_document(build_example_tree(), f)

        assert path.read_text(encoding="utf-8") == EXPECTED_DOCUMENT

    def test_declaration_always_first(self) -> None:
        """Test the fixed declaration precedes even a lone empty root."""
        assert XMLElement("r").to_string() == DECLARATION + "<r />\n"

    def test_serialization_does_not_mutate_tree(self) -> None:
        """Test a tree can be written repeatedly with identical output."""
        root = build_example_tree()
        snapshot = build_example_tree()

        first = root.to_string()
        second = root.to_string()

        assert first == second == EXPECTED_DOCUMENT
        assert root == snapshot

    def test_concurrent_writes_of_same_tree(self) -> None:
        """Test the same tree can be serialized from several threads."""
        root = build_example_tree()
        results: List[str] = []
        lock = threading.Lock()

        def serialize() -> None:
            text = root.to_string()
            with lock:
                results.append(text)

        threads = [threading.Thread(target=serialize) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert results == [EXPECTED_DOCUMENT] * 8

    def test_output_is_well_formed_xml(self) -> None:
        """Test lxml parses the output and sees the original values."""
        document = build_example_tree().to_string()
        # lxml rejects str input that carries an encoding declaration
        parsed = etree.fromstring(document.encode("utf-8"))

        assert parsed.tag == "root"
        assert [child.tag for child in parsed] == ["child1", "child2", "child3", "child4"]
        child2 = parsed.find("child2")
        assert child2.get("at1") == "test &"
        assert child2.get("at2") == "test <"
        assert child2.get("at3") == 'test "'
        assert parsed.find("child3").text == "&< &"
        assert parsed.find("child1")[1].text == "Example Text\nNew line"


class TestElementLayout:
    """Test the per-element emission rules."""

    def test_self_closing_with_attributes(self) -> None:
        """Test empty elements close with a space before the slash."""
        element = XMLElement("name")
        element.add_attribute("attr", "v")

        assert element.to_string() == DECLARATION + '<name attr="v" />\n'

    def test_text_element_on_one_line(self) -> None:
        """Test text leaves keep open tag, text and close tag together."""
        element = XMLElement("age")
        element.add_text(24)

        assert element.to_string() == DECLARATION + "<age>24</age>\n"

    def test_indentation_matches_depth(self) -> None:
        """Test an element at depth D is prefixed by exactly D tabs."""
        depth = 5
        elements = [XMLElement(f"level{index}") for index in range(depth + 1)]
        for parent, child in reversed(list(zip(elements, elements[1:]))):
            parent.add_child(child)

        lines = elements[0].to_string().splitlines()[1:]

        for index in range(depth + 1):
            open_line = lines[index]
            assert open_line.startswith("\t" * index + "<level")
            assert not open_line.startswith("\t" * (index + 1))
        assert lines[depth] == "\t" * depth + f"<level{depth} />"
        assert lines[-1] == "</level0>"

    def test_attributes_emitted_in_first_insertion_order(self) -> None:
        """Test attribute order in output follows first insertion."""
        element = XMLElement("e")
        element.add_attribute("b", 1)
        element.add_attribute("a", 2)
        element.add_attribute("b", 3)

        assert element.to_string() == DECLARATION + '<e b="3" a="2" />\n'

    def test_format_attributes(self) -> None:
        """Test the attribute fragment builder."""
        assert format_attributes({}) == ""
        assert format_attributes({"x": "1", "y": "&amp;"}) == ' x="1" y="&amp;"'


class ShortWriteSink:
    """Raw-style sink that accepts at most a few bytes per call."""

    def __init__(self, max_bytes: int) -> None:
        self.max_bytes = max_bytes
        self.buffer = bytearray()
        self.calls = 0

    def write(self, data: bytes) -> int:
        self.calls += 1
        accepted = bytes(data[:self.max_bytes])
        self.buffer.extend(accepted)
        return len(accepted)


class StalledSink:
    """Sink that never accepts any bytes."""

    def write(self, data: bytes) -> int:
        return 0


class TestDeepTrees:
    """Test trees nested deeper than the interpreter recursion limit."""

    def test_deep_chain_serializes(self) -> None:
        """Test a 5000-level chain is written completely."""
        depth = 5000
        root = XMLElement("n")
        current = root
        for _ in range(depth):
            child = XMLElement("n")
            current.add_child(child)
            current = child
        current.add_text("leaf")

        sink = io.BytesIO()
        writer = XMLWriter(sink)
        writer.write_document(root)
        lines = sink.getvalue().decode("utf-8").splitlines()

        assert writer.elements_written == depth + 1
        assert len(lines) == 1 + 2 * depth + 1
        assert lines[depth + 1] == "\t" * depth + "<n>leaf</n>"
        assert lines[-1] == "</n>"
        assert lines[-2] == "\t</n>"


class TestShortWrites:
    """Test sinks that accept fewer bytes than requested."""

    def test_short_writes_are_completed(self) -> None:
        """Test every byte reaches a sink that writes in small pieces."""
        sink = ShortWriteSink(max_bytes=3)

        build_example_tree().write(sink)

        assert bytes(sink.buffer) == EXPECTED_DOCUMENT.encode("utf-8")
        assert sink.calls > EXPECTED_DOCUMENT.count("\n")

    def test_stalled_sink_raises_write_error(self) -> None:
        """Test a sink accepting no bytes is reported instead of looping."""
        with pytest.raises(XMLWriteError, match="accepted no bytes"):
            XMLElement("r").write(StalledSink())


class TestWriteFailures:
    """Test propagation of sink failures."""

    def test_sink_failure_raises_write_error(self) -> None:
        """Test an OSError from the sink surfaces as XMLWriteError."""
        sink = FailingSink(fail_after=3)

        with pytest.raises(XMLWriteError) as exc_info:
            build_example_tree().write(sink)

        assert isinstance(exc_info.value, OSError)
        assert isinstance(exc_info.value.__cause__, OSError)
        assert "No space left on device" in str(exc_info.value)

    def test_output_before_failure_remains(self) -> None:
        """Test lines written before the failure stay in the sink."""
        sink = FailingSink(fail_after=2)

        with pytest.raises(XMLWriteError):
            build_example_tree().write(sink)

        assert b"".join(sink.chunks) == (DECLARATION + "<root>\n").encode("utf-8")

    def test_closed_stream_raises_write_error(self) -> None:
        """Test writing to a closed stream is reported as a write error."""
        sink = io.BytesIO()
        sink.close()

        with pytest.raises(XMLWriteError):
            XMLElement("r").write(sink)

    def test_failure_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test sink failures are logged with the writer component."""
        with caplog.at_level(logging.ERROR, logger="simple_xml_builder.serialization.writer"):
            with pytest.raises(XMLWriteError):
                XMLElement("r").write(FailingSink(fail_after=0), correlation_id="req-1")

        record = caplog.records[-1]
        assert record.component == "writer"
        assert record.correlation_id == "req-1"


class TestXMLWriter:
    """Test XMLWriter statistics."""

    def test_counts_elements_and_bytes(self) -> None:
        """Test the writer tracks elements and bytes written."""
        sink = io.BytesIO()
        writer = XMLWriter(sink)

        writer.write_document(build_example_tree())

        assert writer.elements_written == 8
        assert writer.bytes_written == len(EXPECTED_DOCUMENT.encode("utf-8"))
