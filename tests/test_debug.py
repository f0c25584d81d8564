"""Tests for the structure report."""

from prompt_extractor.debug import describe_structure


def test_report_for_canonical_key(wrapped_export):
    lines = describe_structure(wrapped_export)
    assert "Top-level keys: ['conversations']" in lines
    assert "Found 'conversations' array with 2 items" in lines
    assert "Sample conversation keys: ['id', 'title', 'created_at', 'messages']" in lines
    assert "Sample message keys: ['role', 'content']" in lines


def test_report_without_messages():
    lines = describe_structure({"conversations": [{"uuid": "x", "chat_messages": []}]})
    assert "No 'messages' found in conversation" in lines


def test_report_for_bare_array(claude_export):
    lines = describe_structure(claude_export)
    assert "Top-level keys: []" in lines
    assert "The file contains an array with 2 items" in lines
    assert "First item keys: ['uuid', 'name', 'created_at', 'chat_messages']" in lines
    assert "Found array at '0.chat_messages' with 3 items" in lines
    # empty lists are not reported
    assert not any("1.chat_messages" in line for line in lines)


def test_recursive_descent_reports_nested_lists():
    document = {
        "export": {
            "meta": {"tags": ["a"]},
            "threads": [{"title": "t", "messages": []}],
        },
        "empty": [],
    }
    lines = describe_structure(document)
    assert "Found array at 'export.meta.tags' with 1 items" in lines
    assert "Found array at 'export.threads' with 1 items" in lines
    assert "Sample item keys at 'export.threads': ['title', 'messages']" in lines
    assert not any("'empty'" in line for line in lines)
    assert not any("Sample item keys at 'export.meta.tags'" in line for line in lines)


def test_shared_containers_are_visited_once():
    shared = {"items": [1, 2]}
    lines = describe_structure({"a": shared, "b": shared})
    assert sum("Found array" in line for line in lines) == 1


def test_scalar_document():
    lines = describe_structure("text")
    assert lines[1] == "Top-level keys: []"
    assert not any(line.startswith("Found array") for line in lines)


def test_deeply_nested_document_is_walked_without_recursion():
    document = {"leaf": [1]}
    for _ in range(5000):
        document = {"a": document}
    lines = describe_structure(document)
    assert sum(line.startswith("Found array at 'a.a.a.") for line in lines) == 1


def test_walk_resumes_siblings_after_descending():
    document = {"x": {"inner": [1]}, "y": [2, 3]}
    lines = [line for line in describe_structure(document) if line.startswith("Found array")]
    assert lines == [
        "Found array at 'x.inner' with 1 items",
        "Found array at 'y' with 2 items",
    ]
