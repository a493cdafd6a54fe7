import logging
from pathlib import Path
import pytest

from gltftex.core import disk, format
from gltftex.core.config import ExportSettings
from gltftex.core.enums import TextureMapType, TextureShape, PixelFormat
from gltftex.core.inspector import StaticInspector, ImporterInfo
from .conftest import make_texture

ON = ExportSettings(tryExportTexturesFromDisk=True)

@pytest.fixture
def source(tmp_path):
	path = tmp_path / 'brick.png'
	path.write_bytes(b'\x89PNG\r\n\x1a\nnot really a png')
	return path

def inspector_for(tex, path, **importer):
	return StaticInspector(paths={ tex: path }, importers={ tex: ImporterInfo(**importer) })

def test_resolves_png_source(source):
	tex = make_texture('brick')
	resolved = disk.resolve(tex, TextureMapType.Main, ON, inspector_for(tex, source))
	assert resolved is not None
	assert resolved.source == source
	assert resolved.path == source.as_posix().lstrip('/')
	assert resolved.mimeType == 'image/png'

def test_path_is_relative_to_project_root(tmp_path):
	path = tmp_path / 'Assets' / 'Textures' / 'brick.png'
	path.parent.mkdir(parents=True)
	path.write_bytes(b'\x89PNG')
	tex = make_texture('brick')
	inspector = StaticInspector(paths={ tex: path }, importers={ tex: ImporterInfo() }, projectRoot=tmp_path)

	resolved = disk.resolve(tex, TextureMapType.Main, ON, inspector)
	assert resolved is not None
	assert resolved.path == 'Assets/Textures/brick.png'

@pytest.mark.parametrize('source, expected', [
	('/abs/maps/brick.png', 'abs/maps/brick.png'),
	('../shared/brick.png', 'shared/brick.png'),
	('maps/brick.png', 'maps/brick.png'),
])
def test_export_path_stays_inside_output(source, expected):
	assert disk.export_path(Path(source), None) == expected

def test_jpeg_source_mime(tmp_path):
	path = tmp_path / 'photo.JPEG'
	path.write_bytes(b'\xff\xd8\xff')
	tex = make_texture('photo')
	resolved = disk.resolve(tex, TextureMapType.Main, ON, inspector_for(tex, path))
	assert resolved is not None
	assert resolved.mimeType == 'image/jpeg'

def test_disabled_by_setting(source):
	tex = make_texture('brick')
	assert disk.resolve(tex, TextureMapType.Main, ExportSettings(), inspector_for(tex, source)) is None

@pytest.mark.parametrize('settings', [ON, ExportSettings()])
def test_grayscale_normal_map_is_never_copied(source, settings):
	tex = make_texture('brick')
	inspector = inspector_for(tex, source, convertToNormalmap=True)
	assert disk.resolve(tex, TextureMapType.Bump, settings, inspector) is None
	assert disk.resolve(tex, TextureMapType.Main, ON, inspector) is not None

@pytest.mark.parametrize('mapType', [TextureMapType.MetallicGloss, TextureMapType.SpecGloss])
def test_gloss_with_alpha_is_converted(source, mapType):
	tex = make_texture('brick')
	inspector = inspector_for(tex, source, sourceHasAlpha=True)
	assert disk.resolve(tex, mapType, ON, inspector) is None
	assert disk.resolve(tex, TextureMapType.Occlusion, ON, inspector) is not None

def test_requires_plain_2d_importer(source):
	tex = make_texture('brick')
	assert disk.resolve(tex, TextureMapType.Main, ON, inspector_for(tex, source, shape=TextureShape.Cube)) is None
	assert disk.resolve(tex, TextureMapType.Main, ON, StaticInspector(paths={ tex: source })) is None

def test_missing_file(tmp_path):
	tex = make_texture('brick')
	assert disk.resolve(tex, TextureMapType.Main, ON, inspector_for(tex, tmp_path / 'gone.png')) is None

def test_unsupported_extension_is_reencoded(tmp_path, caplog):
	path = tmp_path / 'brick.tga'
	path.write_bytes(b'TGA')
	tex = make_texture('brick')

	with caplog.at_level(logging.WARNING):
		assert disk.resolve(tex, TextureMapType.Main, ON, inspector_for(tex, path)) is None
	assert 're-encoded' in caplog.text

def test_sub_asset_path_is_disambiguated(source):
	tex = make_texture('leaf')
	inspector = StaticInspector(
		paths={ tex: source },
		importers={ tex: ImporterInfo() },
		subAssetPaths={ source })
	resolved = disk.resolve(tex, TextureMapType.Main, ON, inspector)
	assert resolved is not None
	assert resolved.path.endswith('/brick-leaf.png')

def test_passthrough_keeps_source_extension(source):
	tex = make_texture('brick', pixelFormat=PixelFormat.RGB24)
	path, fmt, resolved = format.output_path(tex, TextureMapType.Main, ON, inspector_for(tex, source))
	assert path == 'brick.png'
	assert fmt.extension == '.jpg'
	assert resolved is not None
