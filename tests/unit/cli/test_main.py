"""Unit tests for CLI command handling."""

from __future__ import annotations

import json

from cli.main import main


def test_cli_kinds_lists_entity_kinds(capsys) -> None:
    """CLI kinds should print every registered kind."""
    exit_code = main(["kinds"])
    output = capsys.readouterr().out.split()

    assert exit_code == 0 and "inventory_item" in output


def test_cli_add_then_list_roundtrips(tmp_path, capsys) -> None:
    """CLI add should persist entities that list prints back."""
    base = ["--data-root", str(tmp_path)]
    main(base + ["add", "stock", "--kind", "inventory_item", "--field", "id=1",
                 "--field", "name=Laptop", "--field", "quantity=5",
                 "--field", "date_added=2024-06-01T10:00:00"])
    main(base + ["add", "stock", "--kind", "inventory_item", "--field", "id=2",
                 "--field", "name=Phone", "--field", "quantity=10",
                 "--field", "date_added=2024-06-02T10:00:00"])
    capsys.readouterr()

    exit_code = main(base + ["list", "stock", "--kind", "inventory_item"])
    lines = capsys.readouterr().out.strip().splitlines()

    assert exit_code == 0
    assert [json.loads(line)["name"] for line in lines] == ["Laptop", "Phone"]
    assert (tmp_path / "stock.json").exists()


def test_cli_add_quoted_numeric_name_stays_text(tmp_path, capsys) -> None:
    """Quoted values should be kept as strings."""
    base = ["--data-root", str(tmp_path)]
    main(base + ["add", "students", "--kind", "student", "--field", "id=1",
                 "--field", 'full_name="404"', "--field", "score=88"])
    capsys.readouterr()

    main(base + ["list", "students", "--kind", "student"])
    payload = json.loads(capsys.readouterr().out)

    assert payload == {"id": 1, "full_name": "404", "score": 88}


def test_cli_add_reports_invalid_field(tmp_path, capsys) -> None:
    """Invalid field values should exit with an error message."""
    exit_code = main(["--data-root", str(tmp_path), "add", "students", "--kind", "student",
                      "--field", "id=1", "--field", "full_name=Kofi", "--field", "score=high"])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert captured.err.startswith("error:")
    assert not (tmp_path / "students.json").exists()


def test_cli_list_reports_malformed_log(tmp_path, capsys) -> None:
    """Malformed log files should surface as CLI errors."""
    (tmp_path / "broken.json").write_text("{", encoding="utf-8")

    exit_code = main(["--data-root", str(tmp_path), "list", "broken", "--kind", "patient"])

    assert exit_code == 1
    assert "Failed to load log" in capsys.readouterr().err
