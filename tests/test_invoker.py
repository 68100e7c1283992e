"""
Tests for CommandBuilder — argv assembly and execution.

Path translation and token lookup go through the mock adapters;
subprocess.run / Popen are patched wherever something would run.
"""

import io
import subprocess
from unittest.mock import patch

import pytest

from wink.adapters.base import LaunchError
from wink.adapters.mock import MockPathTranslator
from wink.adapters.shell.environment import EnvironmentResolver
from wink.core.engine.invoker import CommandBuilder, CommandLine
from wink.core.models import Invocable

RUN = "wink.core.engine.invoker.subprocess.run"
POPEN = "wink.core.engine.invoker.subprocess.Popen"


@pytest.fixture
def streams():
    return io.StringIO(), io.StringIO()


@pytest.fixture
def quiet_builder(translator, resolver, streams):
    out, err = streams
    return CommandBuilder(translator, resolver, out=out, err=err)


# ── CommandLine ──────────────────────────────────────────────────────


class TestCommandLine:
    def test_starts_with_launcher(self):
        line = CommandLine("cmd.exe")
        assert line.argv == ["cmd.exe"]
        assert line.rendered == "cmd.exe "

    def test_add_and_final(self):
        line = CommandLine("bash.exe")
        line.add("-c")
        line.add_final("ls -la")
        assert line.argv == ["bash.exe", "-c", "ls -la"]
        assert line.rendered == "bash.exe -c ls -la"


# ── Building ─────────────────────────────────────────────────────────


class TestBuildHostShell:
    def test_cmd_waits_then_runs(self, builder, wsl):
        inv = Invocable.cmd("notepad", "notepad.exe")
        line = builder.build(inv, ["file.txt"])
        assert line.argv == ["cmd.exe", "/wait", "/c", "notepad.exe", "file.txt"]
        assert line.rendered == "cmd.exe /wait /c notepad.exe file.txt "

    def test_start(self, builder, wsl):
        inv = Invocable(code="s", command="x.exe", use_start=True)
        assert builder.build(inv).argv == ["cmd.exe", "/wait", "/c", "start", "x.exe"]

    def test_background(self, builder, wsl):
        inv = Invocable.bkg("dotpeek", "dotPeek64.exe")
        assert builder.build(inv).argv == ["cmd.exe", "/c", "start", "/b", "dotPeek64.exe"]

    def test_call(self, builder, wsl):
        inv = Invocable(code="c", command="setup.bat", use_cmd=True, use_call=True)
        assert builder.build(inv).argv == ["cmd.exe", "/wait", "/c", "call", "setup.bat"]

    def test_empty_command_passes_arguments(self, builder, wsl):
        inv = Invocable.cmd("cmd", "")
        line = builder.build(inv, ["echo", "%PATH%"])
        assert line.argv == ["cmd.exe", "/wait", "/c", "echo", "%PATH%"]

    def test_preconfigured_arguments_first(self, builder, wsl):
        inv = Invocable.cmd("flushdns", "ipconfig.exe", "", ["/flushdns"])
        assert builder.build(inv, ["/all"]).argv[-2:] == ["/flushdns", "/all"]

    def test_arguments_translated_to_windows(self, resolver, wsl):
        translator = MockPathTranslator(to_windows={"/mnt/c/temp/a.txt": "C:\\temp\\a.txt"})
        builder = CommandBuilder(translator, resolver)
        line = builder.build(Invocable.cmd("notepad", "notepad.exe"), ["/mnt/c/temp/a.txt"])
        assert line.argv[-1] == "C:\\temp\\a.txt"
        assert ("/mnt/c/temp/a.txt", False) in translator.call_log

    def test_command_translated_to_windows(self, translator, builder, wsl):
        translator.set_translation("/mnt/c/tools/x.exe", "C:\\tools\\x.exe", to_unix=False)
        line = builder.build(Invocable.cmd("x", "/mnt/c/tools/x.exe"))
        assert line.argv == ["cmd.exe", "/wait", "/c", "C:\\tools\\x.exe"]

    def test_syslive_command(self, builder, wsl):
        inv = Invocable.cmd("bginfo", "$syslivebginfo64.exe", "", ["-accepteula"])
        line = builder.build(inv)
        assert line.argv[3:] == ["\\\\live.sysinternals.com\\tools\\bginfo64.exe", "-accepteula"]

    def test_conflicting_flags_use_host_shell_only(self, builder, wsl):
        inv = Invocable(code="both", command="x", use_cmd=True, use_bash=True)
        argv = builder.build(inv).argv
        assert argv[0] == "cmd.exe"
        assert "-c" not in argv


class TestBuildWslShell:
    def test_arguments_joined_into_one(self, builder, wsl):
        inv = Invocable.sh("bash", "")
        line = builder.build(inv, ["echo", "$USER"])
        assert line.argv == ["bash.exe", "-c", "echo $USER"]
        assert line.rendered == "bash.exe -c echo $USER"

    def test_command_then_joined_arguments(self, builder, wsl):
        inv = Invocable.sh("gimp", "/usr/bin/gimp")
        line = builder.build(inv, ["a.png", "b.png"])
        assert line.argv == ["bash.exe", "-c", "/usr/bin/gimp", "a.png b.png"]

    def test_no_arguments(self, builder, wsl):
        line = builder.build(Invocable.sh("gimp", "/usr/bin/gimp"))
        assert line.argv == ["bash.exe", "-c", "/usr/bin/gimp"]

    def test_arguments_translated_to_unix(self, resolver, wsl):
        translator = MockPathTranslator(to_unix={"C:\\temp": "/mnt/c/temp"})
        builder = CommandBuilder(translator, resolver)
        line = builder.build(Invocable.sh("bash", ""), ["ls", "C:\\temp"])
        assert line.argv[-1] == "ls /mnt/c/temp"


class TestBuildExplorer:
    def test_uri(self, builder, wsl):
        inv = Invocable.exp("desktop", "shell:Desktop")
        assert builder.build(inv).argv == ["explorer.exe", "shell:Desktop"]

    def test_empty_command(self, builder, wsl):
        inv = Invocable.exp("exp", "")
        assert builder.build(inv, ["report.docx"]).argv == ["explorer.exe", "report.docx"]


class TestBuildDirect:
    def test_command_is_launcher(self, builder, wsl):
        line = builder.build(Invocable.bin("notepad", "notepad.exe"), ["file.txt"])
        assert line.launcher == "notepad.exe"
        assert line.argv == ["notepad.exe", "file.txt"]
        assert line.rendered == "notepad.exe file.txt "

    def test_token_in_command(self, environment, wsl):
        translator = MockPathTranslator(to_unix={"C:\\Program Files": "/mnt/c/Program Files"})
        builder = CommandBuilder(translator, EnvironmentResolver(environment, translator))
        inv = Invocable.bin("word", "$pf64/Microsoft Office/root/Office16/WINWORD.EXE")
        assert builder.build(inv).launcher == (
            "/mnt/c/Program Files/Microsoft Office/root/Office16/WINWORD.EXE"
        )

    def test_launcher_translated_to_unix_under_wsl(self, translator, resolver, wsl):
        CommandBuilder(translator, resolver).build(Invocable.bin("n", "notepad.exe"))
        assert translator.call_log[0] == ("notepad.exe", True)

    def test_launcher_translated_to_windows_on_windows(self, translator, resolver, monkeypatch):
        from wink.core import context

        monkeypatch.setattr(context, "is_windows", lambda: True)
        CommandBuilder(translator, resolver).build(Invocable.bin("n", "notepad.exe"))
        assert translator.call_log[0] == ("notepad.exe", False)

    def test_empty_command_raises(self, builder, wsl):
        with pytest.raises(LaunchError, match="no command"):
            builder.build(Invocable.bin("empty", ""))


class TestCallerArguments:
    def test_tokens_not_substituted(self, builder, environment, wsl):
        line = builder.build(Invocable.cmd("cmd", ""), ["echo", "$pf64"])
        assert line.argv[-1] == "$pf64"
        assert environment.requested == []

    def test_tokens_substituted_in_preconfigured(self, builder, wsl):
        inv = Invocable.cmd("home", "explorer.exe", "", ["$userpath"])
        assert builder.build(inv).argv[-1] == "C:\\Users\\jw"


# ── Invoking ─────────────────────────────────────────────────────────


class TestInvoke:
    def test_dry_run_executes_nothing(self, quiet_builder, wsl):
        with patch(RUN) as run, patch(POPEN) as popen:
            result = quiet_builder.invoke(Invocable.cmd("notepad", "notepad.exe"), dry_run=True)
        run.assert_not_called()
        popen.assert_not_called()
        assert result.dry_run
        assert not result.executed
        assert result.argv == ["cmd.exe", "/wait", "/c", "notepad.exe"]

    def test_verbose_prints_command_line(self, quiet_builder, streams, wsl):
        out, _ = streams
        quiet_builder.invoke(
            Invocable.cmd("notepad", "notepad.exe"), dry_run=True, verbose=True, args=["file.txt"],
        )
        assert out.getvalue() == "cmd.exe /wait /c notepad.exe file.txt \n"

    def test_not_verbose_prints_nothing(self, quiet_builder, streams, wsl):
        out, _ = streams
        quiet_builder.invoke(Invocable.cmd("notepad", "notepad.exe"), dry_run=True)
        assert out.getvalue() == ""

    def test_foreground_passes_output_through(self, quiet_builder, streams, wsl):
        out, err = streams
        done = subprocess.CompletedProcess([], 0, stdout="hello", stderr="careful\n")
        with patch(RUN, return_value=done) as run:
            result = quiet_builder.invoke(Invocable.sh("bash", ""), args=["echo", "hello"])
        assert run.call_args[0][0] == ["bash.exe", "-c", "echo hello"]
        assert out.getvalue() == "hello\n"
        assert err.getvalue() == "careful\n"
        assert result.executed
        assert result.return_code == 0
        assert result.stdout == "hello"

    def test_nonzero_exit_is_reported_not_raised(self, quiet_builder, wsl):
        done = subprocess.CompletedProcess([], 5, stdout="", stderr="")
        with patch(RUN, return_value=done):
            result = quiet_builder.invoke(Invocable.cmd("x", "x.exe"))
        assert result.return_code == 5
        assert not result.ok

    def test_background_does_not_wait(self, quiet_builder, wsl):
        with patch(RUN) as run, patch(POPEN) as popen:
            result = quiet_builder.invoke(Invocable.bkg("dotpeek", "dotPeek64.exe"))
        run.assert_not_called()
        popen.assert_called_once_with(["cmd.exe", "/c", "start", "/b", "dotPeek64.exe"])
        assert result.executed
        assert result.background
        assert result.return_code is None

    def test_spawn_failure(self, quiet_builder, wsl):
        with patch(RUN, side_effect=FileNotFoundError("cmd.exe")):
            with pytest.raises(LaunchError, match="Failed to execute cmd.exe"):
                quiet_builder.invoke(Invocable.cmd("x", "x.exe"))

    def test_background_spawn_failure(self, quiet_builder, wsl):
        with patch(POPEN, side_effect=PermissionError("denied")):
            with pytest.raises(LaunchError):
                quiet_builder.invoke(Invocable.bkg("x", "x.exe"))
