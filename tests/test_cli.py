"""CLI tests: command discovery, help, exit codes and end-to-end runs through main()."""

import json
from pathlib import Path

import pytest
from loguru import logger
from splash_theme.__main__ import main
from splash_theme.registry import discover, get

SPLASH_VARS = [
    'SPLASH_BRAND_PALETTE',
    'SPLASH_BACKGROUND',
    'SPLASH_CONTRAST_THRESHOLD',
    'SPLASH_SATURATION_THRESHOLD',
    'SPLASH_MIN_POPULATION',
    'SPLASH_WORKERS',
    'SPLASH_IO_TIMEOUT',
    'SPLASH_LOG_LEVEL',
]


@pytest.fixture(autouse=True)
def isolated(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Run each test in an empty repo-like cwd with no SPLASH_* variables set."""
    for key in SPLASH_VARS:
        monkeypatch.delenv(key, raising=False)
    (tmp_path / '.git').mkdir()
    monkeypatch.chdir(tmp_path)
    yield
    # main() installs a stderr sink bound to the captured stream
    logger.remove()


class TestRegistry:
    def test_discovers_all_commands(self):
        assert set(discover()) == {'build', 'analyze', 'palette', 'refine', 'gallery'}

    def test_unknown_command(self):
        with pytest.raises(KeyError, match='Available'):
            get('nope')


class TestHelp:
    def test_lists_commands(self, capsys):
        assert main(['help']) == 0
        out = capsys.readouterr().out
        for name in ['build', 'analyze', 'palette', 'refine', 'gallery']:
            assert name in out

    def test_command_docs(self, capsys):
        assert main(['help', 'build']) == 0
        assert 'allImages' in capsys.readouterr().out

    def test_unknown_topic(self, capsys):
        assert main(['help', 'nope']) == 1
        assert 'Unknown command: nope' in capsys.readouterr().err

    def test_no_command(self, capsys):
        assert main([]) == 1


class TestConfigurationErrors:
    def test_empty_brand_palette(self, tmp_path: Path, capsys):
        out = tmp_path / 'image_data.json'
        assert main(['--brand', '', 'build', str(tmp_path), '-o', str(out)]) == 2
        assert 'Brand palette is empty' in capsys.readouterr().err
        assert not out.exists()

    def test_bad_background(self, capsys):
        assert main(['--background', 'nope', 'refine', '#ffffff']) == 2
        assert 'invalid configuration' in capsys.readouterr().err

    def test_bad_environment_value(self, monkeypatch: pytest.MonkeyPatch, capsys):
        monkeypatch.setenv('SPLASH_IO_TIMEOUT', 'soon')
        assert main(['refine', '#ffffff']) == 2

    def test_dotenv_is_read(self, tmp_path: Path, capsys):
        (tmp_path / '.env').write_text('SPLASH_BRAND_PALETTE=#815117\n')
        assert main(['refine', '#c97f24']) == 0
        assert '#c97f24 → #815117' in capsys.readouterr().out


class TestBuild:
    def test_writes_manifest(self, tmp_path: Path, make_image, capsys):
        root = tmp_path / 'splash-images'
        make_image(root / '1' / 'wide.png', (64, 36), (200, 30, 30))
        make_image(root / '1' / 'tall.png', (36, 64), (30, 60, 200))
        out = tmp_path / 'image_data.json'

        assert main(['--workers', '2', 'build', str(root), '-o', str(out)]) == 0
        data = json.loads(out.read_text())
        assert [entry['folder'] for entry in data] == ['1']
        assert data[0]['desktop'] == 'wide.png'
        assert data[0]['mobile'] == 'tall.png'
        assert 'Successfully built' in capsys.readouterr().err

    def test_json_output_matches_file(self, tmp_path: Path, make_image, capsys):
        root = tmp_path / 'splash-images'
        make_image(root / '5' / 'sq.png', (20, 20))
        out = tmp_path / 'image_data.json'

        assert main(['build', str(root), '-o', str(out), '--json']) == 0
        assert capsys.readouterr().out == out.read_text()

    def test_missing_root(self, tmp_path: Path, capsys):
        assert main(['build', str(tmp_path / 'nope'), '-o', str(tmp_path / 'out.json')]) == 1
        assert 'Could not read directory' in capsys.readouterr().err

    def test_unwritable_output(self, tmp_path: Path, make_image, capsys):
        root = tmp_path / 'splash-images'
        make_image(root / '1' / 'wide.png', (64, 36))
        out = tmp_path / 'missing' / 'image_data.json'

        assert main(['build', str(root), '-o', str(out)]) == 1
        assert f'could not write {out}' in capsys.readouterr().err
        assert not (tmp_path / 'missing').exists()


class TestOtherCommands:
    def test_refine(self, capsys):
        assert main(['refine', '#71BAED']) == 0
        assert '#71baed → #71baed' in capsys.readouterr().out

    def test_refine_invalid_colour(self, capsys):
        assert main(['refine', 'blue']) == 1
        assert 'Error' in capsys.readouterr().err

    def test_analyze(self, tmp_path: Path, make_image, capsys):
        image = make_image(tmp_path / 'wide.png', (64, 36))
        assert main(['analyze', str(image), '--json']) == 0
        [result] = json.loads(capsys.readouterr().out)
        assert result['type'] == 'landscape'
        assert result['failed'] is False

    def test_analyze_missing_file_fails(self, tmp_path: Path, capsys):
        assert main(['analyze', str(tmp_path / 'nope.png')]) == 1
        assert '✗ failed' in capsys.readouterr().out

    def test_palette(self, tmp_path: Path, make_image, capsys):
        image = make_image(tmp_path / 'red.png', (20, 20), (255, 0, 0))
        assert main(['palette', str(image), '--json']) == 0
        assert json.loads(capsys.readouterr().out) == {'Vibrant': {'hex': '#ff0000', 'population': 400}}

    def test_gallery(self, tmp_path: Path, make_image):
        make_image(tmp_path / 'DJ-images' / 'one.jpg', (10, 10))
        out = tmp_path / 'gallery_images.json'
        assert main(['gallery', str(tmp_path / 'DJ-images'), '-o', str(out)]) == 0
        assert [item['filename'] for item in json.loads(out.read_text())] == ['one.jpg']
