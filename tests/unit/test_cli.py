import pytest

from hackvm import cli
from hack_cpu import HackMachine


def test_translate_single_file(tmp_path, capsys):
    src = tmp_path / "SimpleAdd.vm"
    src.write_text("// add two numbers\npush constant 7\npush constant 8\nadd\n")
    cli.main([str(src), "--no-bootstrap"])

    out = tmp_path / "SimpleAdd.asm"
    assert out.exists()
    asm = out.read_text()
    assert "// push constant 7" in asm
    assert "Sys.init" not in asm
    assert "Wrote assembly to" in capsys.readouterr().out

    m = HackMachine(asm)
    m["SP"] = 256
    assert m.run()
    assert m[256] == 15


def test_translate_directory_with_bootstrap(tmp_path):
    prog = tmp_path / "Prog"
    prog.mkdir()
    (prog / "Sys.vm").write_text(
        "function Sys.init 0\npush constant 3\ncall Main.square 1\npop static 0\nlabel HALT\ngoto HALT\n"
    )
    (prog / "Main.vm").write_text(
        "function Main.square 2\n"
        "push argument 0\npop local 0\n"
        "label LOOP\npush local 0\npush constant 0\neq\nif-goto DONE\n"
        "push local 1\npush argument 0\nadd\npop local 1\n"
        "push local 0\npush constant 1\nsub\npop local 0\ngoto LOOP\n"
        "label DONE\npush local 1\nreturn\n"
    )
    (prog / "notes.txt").write_text("ignored")
    out = tmp_path / "prog.asm"
    cli.main([str(prog), "-o", str(out), "--no-comments"])

    asm = out.read_text()
    assert "//" not in asm
    # Main.vm sorts before Sys.vm but the bootstrap still comes first
    assert asm.index("@256") < asm.index("(Main.square)") < asm.index("(Sys.init)")

    m = HackMachine(asm)
    m.run(max_steps=5000)
    assert m["Sys.0"] == 9


def test_default_output_for_directory(tmp_path):
    prog = tmp_path / "Prog"
    prog.mkdir()
    assert cli.default_output(str(prog)) == str(prog / "Prog.asm")


def test_error_exits_without_output(tmp_path, capsys):
    src = tmp_path / "Bad.vm"
    src.write_text("push constant 1\npop constant 0\n")
    with pytest.raises(SystemExit) as info:
        cli.main([str(src)])
    assert info.value.code == 1
    assert not (tmp_path / "Bad.asm").exists()
    err = capsys.readouterr().err
    assert "Bad:2: semantic error" in err


@pytest.mark.parametrize("name", ["missing.vm", "prog.txt"])
def test_bad_input_path(tmp_path, name):
    path = tmp_path / name
    if name.endswith(".txt"):
        path.write_text("push constant 1\n")
    with pytest.raises(SystemExit):
        cli.main([str(path)])


def test_empty_directory(tmp_path):
    with pytest.raises(SystemExit):
        cli.main([str(tmp_path)])


def test_duplicate_label_warning(tmp_path, capsys):
    src = tmp_path / "Dup.vm"
    src.write_text("label A\nlabel A\n")
    cli.main([str(src), "--no-bootstrap"])
    assert "Warning: Dup:2: label 'A' already defined at Dup:1" in capsys.readouterr().err


def test_undecodable_input_exits_cleanly(tmp_path, capsys):
    src = tmp_path / "Bad.vm"
    src.write_bytes(b"push constant 1\n\xff\xfe\n")
    with pytest.raises(SystemExit) as info:
        cli.main([str(src), "--no-bootstrap"])
    assert info.value.code == 1
    assert "Failed to read input file" in capsys.readouterr().err
    assert not (tmp_path / "Bad.asm").exists()
