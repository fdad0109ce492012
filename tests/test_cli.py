import pytest

from asset_renamer.cli import EXIT_OK, EXIT_REFUSED, build_parser, main, run_cli


@pytest.fixture
def folder(tmp_path):
    (tmp_path / "T_Rock_basecolor.png").write_text("bc")
    (tmp_path / "rock_normal.png").write_text("n")
    return tmp_path


def _run(folder, tmp_path, *extra):
    args = [str(folder), "--settings", str(tmp_path / "settings.json"), *extra]
    return run_cli(build_parser().parse_args(args))


def test_dry_run_prints_preview_and_changes_nothing(folder, tmp_path, capsys):
    code = _run(folder, tmp_path, "--prefix", "SM", "--name", "Rock")
    out = capsys.readouterr().out
    assert code == EXIT_OK
    assert "SM_Rock_BC_01.png" in out
    assert "(prefix conflict)" in out
    assert (folder / "T_Rock_basecolor.png").exists()


def test_apply_renames(folder, tmp_path):
    code = _run(folder, tmp_path, "--name", "Rock", "--apply")
    assert code == EXIT_OK
    assert (folder / "T_Rock_BC_01.png").read_text() == "bc"
    assert (folder / "T_Rock_N_01.png").read_text() == "n"


def test_skip_and_descriptor(folder, tmp_path):
    code = _run(folder, tmp_path, "--name", "Rock", "--skip", "rock_normal.png",
                "--descriptor", "T_Rock_basecolor.png=Dif", "--apply")
    assert code == EXIT_OK
    assert (folder / "T_Rock_Dif_01.png").exists()
    assert (folder / "rock_normal.png").exists()


def test_duplicate_names_refused(folder, tmp_path, capsys):
    code = _run(folder, tmp_path, "--name", "Rock", "--manual-descriptor", "Same", "--apply")
    assert code == EXIT_REFUSED
    assert "Duplicate" in capsys.readouterr().err
    assert (folder / "rock_normal.png").exists()


def test_output_folder(folder, tmp_path):
    out = tmp_path / "export"
    code = _run(folder, tmp_path, "--name", "Rock", "--output", str(out), "--apply")
    assert code == EXIT_OK
    assert (out / "T_Rock_BC_01.png").exists()
    assert not (folder / "T_Rock_basecolor.png").exists()


def test_unreadable_folder(tmp_path):
    assert _run(tmp_path / "missing", tmp_path) == EXIT_REFUSED


def test_main_with_arguments_runs_cli(folder, tmp_path):
    assert main([str(folder), "--settings", str(tmp_path / "s.json")]) == EXIT_OK


def test_refused_batch_does_not_create_output_folder(tmp_path):
    src = tmp_path / "src"
    src.mkdir()
    (src / "a_normal.png").write_text("a")
    (src / "b_normal.png").write_text("b")
    out = tmp_path / "export"

    code = _run(src, tmp_path, "--name", "Rock", "--output", str(out), "--apply")

    assert code == EXIT_REFUSED
    assert not out.exists()
    assert (src / "a_normal.png").exists()
