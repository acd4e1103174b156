import io
import os

import pytest

from desktools.stest import Options, main, matches, parse_args


@pytest.fixture
def tree(tmp_path):
    regular = tmp_path / "file.txt"
    regular.write_text("content")
    (tmp_path / "empty").write_text("")
    (tmp_path / ".hidden").write_text("x")
    (tmp_path / "sub").mkdir()
    os.symlink(regular, tmp_path / "link")
    return tmp_path


def test_parse_flags():
    options = parse_args(["-fs", "-d", "a", "b"])
    assert options.flags == frozenset("fsd")
    assert options.paths == ("a", "b")


def test_parse_double_dash_ends_options():
    options = parse_args(["-f", "--", "-d"])
    assert options.flags == frozenset("f")
    assert options.paths == ("-d",)


def test_parse_single_dash_is_a_path():
    options = parse_args(["-", "-f"])
    assert options.flags == frozenset()
    assert options.paths == ("-", "-f")


def test_parse_unknown_flag():
    with pytest.raises(ValueError):
        parse_args(["-z"])


def test_parse_missing_reference():
    with pytest.raises(ValueError):
        parse_args(["-n"])


def test_parse_reference_attached_and_separate(tree):
    ref = str(tree / "file.txt")
    attached = parse_args(["-n" + ref, "x"])
    separate = parse_args(["-n", ref, "x"])
    assert attached.newer == separate.newer
    assert attached.newer == os.stat(ref).st_mtime_ns // 1_000_000_000
    assert separate.paths == ("x",)


def test_parse_missing_reference_file_clears_test(tree):
    options = parse_args(["-o", str(tree / "absent")])
    assert options.older is None


def test_regular_and_directory(tree):
    regular = str(tree / "file.txt")
    directory = str(tree / "sub")
    assert matches(regular, "file.txt", parse_args(["-f"])) is True
    assert matches(directory, "sub", parse_args(["-f"])) is False
    assert matches(directory, "sub", parse_args(["-d"])) is True


def test_hidden_needs_a(tree):
    hidden = str(tree / ".hidden")
    assert matches(hidden, ".hidden", Options()) is False
    assert matches(hidden, ".hidden", parse_args(["-a"])) is True


def test_symlink(tree):
    assert matches(str(tree / "link"), "link", parse_args(["-h"])) is True
    assert matches(str(tree / "file.txt"), "file.txt", parse_args(["-h"])) is False


def test_nonempty(tree):
    assert matches(str(tree / "file.txt"), "file.txt", parse_args(["-s"])) is True
    assert matches(str(tree / "empty"), "empty", parse_args(["-s"])) is False


def test_missing_file_and_inversion(tree):
    missing = str(tree / "absent")
    assert matches(missing, "absent", Options()) is False
    assert matches(missing, "absent", parse_args(["-v"])) is True
    assert matches(str(tree / "sub"), "sub", parse_args(["-vf"])) is True


def test_newer_and_older(tree):
    old = tree / "old"
    new = tree / "new"
    old.write_text("o")
    new.write_text("n")
    os.utime(old, (1_000_000, 1_000_000))
    os.utime(new, (2_000_000, 2_000_000))
    assert matches(str(new), "new", parse_args(["-n", str(old)])) is True
    assert matches(str(old), "old", parse_args(["-n", str(new)])) is False
    assert matches(str(old), "old", parse_args(["-o", str(new)])) is True
    assert matches(str(new), "new", parse_args(["-o", str(new)])) is False


def test_main_prints_matches(tree, capsys):
    code = main(["-f", str(tree / "file.txt"), str(tree / "sub")])
    assert code == 0
    assert capsys.readouterr().out == str(tree / "file.txt") + "\n"


def test_main_no_match(tree, capsys):
    assert main(["-d", str(tree / "file.txt")]) == 1
    assert capsys.readouterr().out == ""


def test_main_usage_error(capsys):
    assert main(["-z"]) == 2
    assert capsys.readouterr().err.startswith("usage: stest")


def test_main_quiet(tree, capsys):
    assert main(["-qf", str(tree / "sub"), str(tree / "file.txt")]) == 0
    assert capsys.readouterr().out == ""


def test_main_lists_directory(tree, capsys):
    assert main(["-lf", str(tree)]) == 0
    names = capsys.readouterr().out.splitlines()
    assert sorted(names) == ["empty", "file.txt", "link"]


def test_main_lists_hidden_with_a(tree, capsys):
    assert main(["-lad", str(tree)]) == 0
    names = capsys.readouterr().out.splitlines()
    assert sorted(names) == [".", "..", "sub"]


def test_main_list_flag_on_file_tests_the_file(tree, capsys):
    assert main(["-lf", str(tree / "file.txt")]) == 0
    assert capsys.readouterr().out == str(tree / "file.txt") + "\n"


def test_main_reads_stdin(tree, capsys, monkeypatch):
    lines = f"{tree / 'file.txt'}\n{tree / 'sub'}\n{tree / 'empty'}"
    monkeypatch.setattr("sys.stdin", io.StringIO(lines))
    assert main(["-f"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == [str(tree / "file.txt"), str(tree / "empty")]