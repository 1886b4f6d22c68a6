from unittest.mock import patch

from click.testing import CliRunner

from pathfinder.cli import main, _wordlists
from pathfinder.models import PathHit, SubdomainHit


def _words(tmp_path, name="words.txt", content="api\ndev\n"):
    p = tmp_path / name
    p.write_text(content, encoding="utf-8")
    return str(p)


class FakeDns:
    errors = 0

    def __call__(self, target):
        if target.startswith("api."):
            return SubdomainHit(target, ("192.0.2.1",))
        return None


class FakeHttp:
    errors = 0

    def __call__(self, target):
        return PathHit(target, 200, 42) if target.endswith("admin") else None

    def close(self):
        pass


def test_wordlists_option_last_wins():
    assert _wordlists(["a.txt", "b.txt:SUB", "c.txt"]) == {"WL1": "c.txt", "SUB": "b.txt"}


@patch("pathfinder.core.DnsProbe", return_value=FakeDns())
def test_sub_command(mock_probe, tmp_path):
    wl = _words(tmp_path)
    result = CliRunner().invoke(
        main, ["sub", "-u", "WL1.example.com", "-w", wl, "--rl", "1000", "-t", "2"]
    )
    assert result.exit_code == 0, result.output
    assert "[+] Found: api.example.com -> 192.0.2.1" in result.output
    assert "Found: dev.example.com" not in result.output
    mock_probe.assert_called_once_with(nameservers=None)


@patch("pathfinder.core.HttpProbe", return_value=FakeHttp())
def test_dir_command_with_output_file(mock_probe, tmp_path):
    wl = _words(tmp_path, content="admin\nlogin\n")
    out = tmp_path / "out.txt"
    result = CliRunner().invoke(
        main,
        ["dir", "-u", "http://h/", "-w", wl, "--rl", "1000", "--mc", "200,301",
         "-o", str(out)],
    )
    assert result.exit_code == 0, result.output
    assert "[+] Found: http://h/admin [Code: 200, Size: 42]" in result.output
    assert "Match Codes:     200, 301" in result.output
    assert out.read_text(encoding="utf-8") == "[+] Found: http://h/admin [Code: 200, Size: 42]\n"


def test_dir_empty_match_codes_rejected(tmp_path):
    wl = _words(tmp_path)
    result = CliRunner().invoke(main, ["dir", "-u", "http://h/WL1", "-w", wl, "--mc", ""])
    assert result.exit_code == 1
    assert "match codes cannot be empty" in result.output


def test_missing_wordlist_is_fatal(tmp_path):
    result = CliRunner().invoke(
        main, ["sub", "-u", "WL1.example.com", "-w", str(tmp_path / "nope.txt")]
    )
    assert result.exit_code == 1
    assert "failed to read wordlist" in result.output


def test_no_marker_and_no_default_wordlist(tmp_path):
    wl = _words(tmp_path)
    result = CliRunner().invoke(main, ["sub", "-u", "example.com", "-w", f"{wl}:SUB"])
    assert result.exit_code == 1
    assert "No markers found" in result.output


@patch("pathfinder.core.HttpProbe", return_value=FakeHttp())
def test_config_file_used(mock_probe, tmp_path):
    wl = _words(tmp_path, content="admin\n")
    conf = tmp_path / "scan.yaml"
    conf.write_text("rate_limit: 1000\nthreads: 3\ntimeout: 4\nfollow_redirects: true\n",
                    encoding="utf-8")
    result = CliRunner().invoke(
        main, ["dir", "-u", "http://h/WL1", "-w", wl, "--config", str(conf)]
    )
    assert result.exit_code == 0, result.output
    assert "Threads:         3" in result.output
    _, kwargs = mock_probe.call_args
    assert kwargs["timeout"] == 4.0
    assert kwargs["follow_redirects"] is True


def test_version():
    result = CliRunner().invoke(main, ["--version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.output
