"""Tests for the tonekit command line: command table, loader and end-to-end runs."""

import json
import os
from pathlib import Path

import pytest
from PIL import Image
from tonekit.__main__ import run
from tonekit.commands import COMMANDS
from tonekit.core.types import Command
from tonekit.loader import from_pil, load_image


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """No stray .env or TONEKIT_* variables leak into or out of a run."""
    monkeypatch.setattr(os, 'environ', dict(os.environ))
    for name in ('TONEKIT_QUALITY', 'TONEKIT_MAX_COLORS', 'TONEKIT_FIX_DISLIKED', 'TONEKIT_LOG_LEVEL'):
        monkeypatch.delenv(name, raising=False)
    (tmp_path / '.git').mkdir()
    monkeypatch.chdir(tmp_path)


def _quadrants(path: Path) -> Path:
    img = Image.new('RGB', (2, 2))
    img.putdata([(255, 0, 0), (0, 255, 0), (0, 0, 255), (255, 255, 0)])
    img.save(path)
    return path


class TestCommandTable:
    def test_all_commands_listed(self):
        assert set(COMMANDS) == {'contrast', 'convert', 'dislike', 'distance', 'extract', 'theme'}

    def test_keyed_by_command_name(self):
        for name, cmd in COMMANDS.items():
            assert isinstance(cmd, Command)
            assert cmd.name == name

    def test_unknown_command_rejected_by_parser(self, capsys: pytest.CaptureFixture[str]):
        with pytest.raises(SystemExit) as exc:
            run(['paint'])
        assert exc.value.code == 2
        assert 'invalid choice' in capsys.readouterr().err


class TestLoader:
    def test_load_png(self, tmp_path: Path):
        path = tmp_path / 'red.png'
        Image.new('RGB', (3, 2), (255, 0, 0)).save(path)
        image = load_image(path)
        assert (image.width, image.height) == (3, 2)
        assert bytes(image.data[:4]) == bytes([255, 0, 0, 255])
        assert len(image.data) == 3 * 2 * 4

    def test_keeps_alpha(self):
        image = from_pil(Image.new('RGBA', (1, 1), (1, 2, 3, 0)))
        assert bytes(image.data) == bytes([1, 2, 3, 0])


class TestExtractCommand:
    def test_json_output(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]):
        path = tmp_path / 'red.png'
        Image.new('RGB', (4, 4), (255, 0, 0)).save(path)
        assert run(['extract', str(path), '-j']) == 0
        out = json.loads(capsys.readouterr().out)
        assert out['command'] == 'extract'
        assert out['source'] == str(path)
        assert out['colors'][0]['hex'] == '#ff0000'
        assert out['colors'][0]['percentage'] == pytest.approx(100.0)

    def test_text_output(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]):
        path = _quadrants(tmp_path / 'quad.png')
        assert run(['extract', str(path), '-n', '2']) == 0
        out = capsys.readouterr().out
        assert out.startswith(f'tonekit extract: {path}')
        assert '── colors' in out
        assert '  1. #' in out
        assert '  3. #' not in out

    def test_max_colors_from_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys):
        monkeypatch.setenv('TONEKIT_MAX_COLORS', '3')
        path = _quadrants(tmp_path / 'quad.png')
        assert run(['extract', str(path), '-j']) == 0
        assert len(json.loads(capsys.readouterr().out)['colors']) == 3

    def test_env_from_dotenv_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]):
        (tmp_path / '.env').write_text('TONEKIT_MAX_COLORS=1\n')
        path = _quadrants(tmp_path / 'quad.png')
        assert run(['extract', str(path), '-j']) == 0
        captured = capsys.readouterr()
        assert len(json.loads(captured.out)['colors']) == 1
        assert 'loaded' in captured.err

    def test_bad_env_value(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys):
        monkeypatch.setenv('TONEKIT_QUALITY', 'ultra')
        path = _quadrants(tmp_path / 'quad.png')
        assert run(['extract', str(path)]) == 1
        assert 'TONEKIT_QUALITY' in capsys.readouterr().err

    def test_missing_image(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]):
        assert run(['extract', str(tmp_path / 'nope.png')]) == 1
        assert capsys.readouterr().err.startswith('tonekit: error:')

    def test_not_an_image(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]):
        path = tmp_path / 'notes.png'
        path.write_text('not pixels')
        assert run(['extract', str(path)]) == 1
        assert 'tonekit: error:' in capsys.readouterr().err


class TestThemeCommand:
    def test_roles_and_tones(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]):
        path = _quadrants(tmp_path / 'quad.png')
        assert run(['theme', str(path), '-t', '10', '90', '-j']) == 0
        out = json.loads(capsys.readouterr().out)
        assert 'primary' in out['theme']
        assert set(out['tones']) == set(out['theme'])
        assert set(out['tones']['primary']) == {'10', '90'}

    def test_transparent_image_fails(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]):
        path = tmp_path / 'clear.png'
        Image.new('RGBA', (2, 2), (0, 0, 0, 0)).save(path)
        assert run(['theme', str(path)]) == 1
        assert 'No colors' in capsys.readouterr().err


class TestDislikeCommand:
    def test_detect_and_fix(self, capsys: pytest.CaptureFixture[str]):
        assert run(['dislike', '#808000', '#3366cc', '--fix', '-j']) == 0
        out = json.loads(capsys.readouterr().out)
        olive, blue = out['dislike']['results']
        assert olive['disliked'] is True
        assert olive['fixed'] != '#808000'
        assert blue['disliked'] is False
        assert blue['fixed'] == '#3366cc'
        assert out['dislike']['summary'] == {'total': 2, 'disliked': 1, 'percentage': 50.0}

    def test_text(self, capsys: pytest.CaptureFixture[str]):
        assert run(['dislike', '#808000']) == 0
        out = capsys.readouterr().out
        assert 'disliked' in out
        assert '1/1 disliked (100.0%)' in out


class TestConvertCommand:
    def test_json(self, capsys: pytest.CaptureFixture[str]):
        assert run(['convert', 'rgb(255, 0, 0)', '-j']) == 0
        out = json.loads(capsys.readouterr().out)['convert']
        assert out['hex'] == '#ff0000'
        assert out['rgb'] == [255, 0, 0]
        assert out['hsl'] == [0, 100, 50]
        assert out['lab'][0] == pytest.approx(53.24, abs=0.05)
        assert len(out['hct']) == 3

    def test_unknown_color(self, capsys: pytest.CaptureFixture[str]):
        assert run(['convert', 'crimson']) == 1
        assert 'Unrecognised color' in capsys.readouterr().err


class TestDistanceCommand:
    def test_same_color(self, capsys: pytest.CaptureFixture[str]):
        assert run(['distance', '#ff0000', 'rgb(255,0,0)', '-j']) == 0
        out = json.loads(capsys.readouterr().out)['distance']
        assert out['metric'] == 'deltaE2000'
        assert out['value'] == pytest.approx(0.0, abs=1e-9)
        assert out['similar'] is True

    def test_metric_choice(self, capsys: pytest.CaptureFixture[str]):
        assert run(['distance', '#000000', '#ff0000', '-m', 'euclidean']) == 0
        assert 'euclidean: 255.0000 (distinct)' in capsys.readouterr().out


class TestContrastCommand:
    def test_mid_gray_on_white(self, capsys: pytest.CaptureFixture[str]):
        assert run(['contrast', '#767676', '#ffffff', '-j']) == 0
        out = json.loads(capsys.readouterr().out)['contrast']
        assert out['ratio'] == pytest.approx(4.54, abs=0.01)
        assert (out['aa'], out['aa_large'], out['aaa'], out['aaa_large']) == (True, True, False, True)

    def test_text_output(self, capsys: pytest.CaptureFixture[str]):
        assert run(['contrast', '#000000', '#ffffff']) == 0
        out = capsys.readouterr().out
        assert 'tonekit contrast: #000000 on #ffffff' in out
        assert 'ratio: 21.00:1' in out
        assert 'AAA  normal ✓ pass  large ✓ pass' in out

    def test_large_text_only(self, capsys: pytest.CaptureFixture[str]):
        assert run(['contrast', '#ffffff', '#808080', '-j']) == 0
        out = json.loads(capsys.readouterr().out)['contrast']
        assert out['aa'] is False
        assert out['aa_large'] is True

    def test_bad_color(self, capsys: pytest.CaptureFixture[str]):
        assert run(['contrast', 'nope', '#ffffff']) == 1
        assert 'tonekit: error: Unrecognised color' in capsys.readouterr().err


class TestHelp:
    def test_lists_commands(self, capsys: pytest.CaptureFixture[str]):
        assert run(['help']) == 0
        out = capsys.readouterr().out
        for name in ('contrast', 'convert', 'dislike', 'distance', 'extract', 'theme'):
            assert name in out

    def test_command_docs(self, capsys: pytest.CaptureFixture[str]):
        assert run(['help', 'extract']) == 0
        assert 'Quality tiers' in capsys.readouterr().out

    def test_unknown_topic(self, capsys: pytest.CaptureFixture[str]):
        assert run(['help', 'paint']) == 1
        assert 'Unknown command' in capsys.readouterr().err

    def test_no_command(self, capsys: pytest.CaptureFixture[str]):
        assert run([]) == 1
