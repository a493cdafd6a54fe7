import numpy as np
import pytest

from gltftex.core import writer
from gltftex.core.format import decide
from gltftex.core.config import ExportSettings
from gltftex.core.enums import TextureMapType, PixelFormat
from gltftex.core.texture import Texture2D
from gltftex.core.inspector import NullInspector
from gltftex.core.io.image import Image
from gltftex.core.texops import SurfacePool
from .conftest import make_texture

PNG_SIGNATURE = b'\x89PNG\r\n\x1a\n'

@pytest.mark.parametrize('size, expected', [(0, 0), (1, 4), (4, 4), (5, 8), (1023, 1024)])
def test_calculate_alignment(size, expected):
	assert writer.calculate_alignment(size, 4) == expected

def test_buffer_writes_are_aligned():
	buffer = writer.BufferWriter()
	for length in range(1, 10):
		offset, byteLength = buffer.write(b'\x01' * length)
		assert offset % 4 == 0
		assert buffer.position % 4 == 0
		assert byteLength == -(-length // 4) * 4
		assert offset + byteLength == buffer.position

def test_buffer_pads_with_zeros():
	buffer = writer.BufferWriter()
	buffer.write(b'abc')
	offset, _ = buffer.write(b'd')
	assert offset == 4
	assert buffer.getvalue() == b'abc\x00d\x00\x00\x00'

def test_write_to_buffer_png(settings):
	tex = make_texture('red', 3, 5)
	buffer = writer.BufferWriter()
	buffer.write(b'xy')

	embedded = writer.write_to_buffer(tex, TextureMapType.Main, buffer, settings, NullInspector())
	assert embedded.byteOffset == 4
	assert embedded.byteLength % 4 == 0
	assert embedded.mimeType == 'image/png'

	payload = buffer.getvalue()[embedded.byteOffset:]
	assert payload.startswith(PNG_SIGNATURE)
	decoded = Image.decode(payload.rstrip(b'\x00'))
	assert decoded.size == (3, 5)

def test_write_to_buffer_jpeg(opaque, settings):
	buffer = writer.BufferWriter()
	embedded = writer.write_to_buffer(opaque, TextureMapType.Main, buffer, settings, NullInspector())
	assert embedded.mimeType == 'image/jpeg'
	assert buffer.getvalue()[embedded.byteOffset:].startswith(b'\xff\xd8')

def test_jpeg_quality_setting_is_applied():
	ramp = np.tile(np.arange(64, dtype=np.uint8) * 4, (64, 1))
	data = np.stack([ramp, ramp.T, 255 - ramp], axis=2)
	tex = Texture2D('ramp', data, pixelFormat=PixelFormat.RGB24)

	payloads = []
	for quality in (10, 95):
		buffer = writer.BufferWriter()
		embedded = writer.write_to_buffer(tex, TextureMapType.Main, buffer, ExportSettings(defaultJpegQuality=quality), NullInspector())
		assert embedded.mimeType == 'image/jpeg'
		payloads.append(buffer.getvalue())

	low, high = payloads
	assert low != high
	assert len(low) < len(high)

def test_failed_write_leaves_buffer_untouched(cubemap, settings):
	buffer = writer.BufferWriter()
	buffer.write(b'abcde')
	before = buffer.getvalue()
	pool = SurfacePool()

	with pytest.raises(TypeError):
		writer.write_to_buffer(cubemap, TextureMapType.Main, buffer, settings, NullInspector(), pool)

	assert buffer.getvalue() == before
	assert buffer.position % 4 == 0
	assert pool.live == 0

def test_write_to_file_creates_directories(tmp_path, settings):
	tex = make_texture('mask', 2, 2, (9, 8, 7, 6), srgb=False)
	fmt = decide(tex, TextureMapType.Occlusion, ExportSettings(useTextureFileTypeHeuristic=False), NullInspector())
	pending = writer.PendingImageExport(tex, TextureMapType.Occlusion, 'deep/er/mask.png', fmt)

	writer.write_to_file(pending, tmp_path, settings)

	written = tmp_path / 'deep' / 'er' / 'mask.png'
	assert written.is_file()
	assert np.array_equal(Image.load(written).data[0, 0], [9, 8, 7, 6])
