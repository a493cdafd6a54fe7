from dataclasses import dataclass
from pathlib import Path
from .enums import TextureMapType
from .config import ExportSettings
from .inspector import SourceAssetInspector
from .texture import Texture, Texture2D, Cubemap
from .format import ImageFormat, decide
from .disk import DiskSource, resolve
from .io.image import Image
from .texops import SurfacePool, surfaces
from . import texops
import logging as log

@dataclass
class PendingImageExport():
	''' An external image waiting to be written. Consumed once by `write_to_file`. '''
	texture: Texture
	mapType: TextureMapType
	path: str
	format: ImageFormat
	disk: DiskSource|None = None

	@property
	def canBeExportedFromDisk(self) -> bool:
		return self.disk is not None

@dataclass(frozen=True)
class BufferImage():
	byteOffset: int
	byteLength: int
	mimeType: str

def read_source(texture: Texture, mapType: TextureMapType, fmt: ImageFormat) -> Image|list[Image]:
	if mapType == TextureMapType.CubeMap:
		if not isinstance(texture, Cubemap):
			raise TypeError(f'Cannot export {texture} as a cubemap!')
		return texture.read_faces(fmt.colorSpace)

	if not isinstance(texture, Texture2D):
		raise TypeError(f'Cannot export {texture} as a {mapType.name} map, expected a 2D texture!')
	return texture.read(fmt.colorSpace)

def render(texture: Texture, mapType: TextureMapType, fmt: ImageFormat, settings: ExportSettings, pool: SurfacePool=surfaces) -> bytes:
	''' Reads, converts and encodes one texture. '''
	source = read_source(texture, mapType, fmt)
	pixels = texops.convert(source, mapType, pool)
	return pixels.encode(fmt.mimeType, settings.defaultJpegQuality)


''' External files '''

def write_to_file(pending: PendingImageExport, outputPath: str|Path, settings: ExportSettings, pool: SurfacePool=surfaces):
	path = Path(outputPath) / pending.path
	path.parent.mkdir(parents=True, exist_ok=True)

	if pending.disk is not None:
		data = pending.disk.read()
	else:
		data = render(pending.texture, pending.mapType, pending.format, settings, pool)

	with open(path, 'wb') as file:
		file.write(data)

	log.info(f'Wrote {pending.mapType.name} image {path} ({len(data)} bytes)')


''' Internal buffer '''

def calculate_alignment(size: int, alignment: int) -> int:
	return (size + alignment - 1) // alignment * alignment

class BufferWriter():
	'''
	Growable binary buffer. Every payload starts and ends on a 4-byte boundary,
	so the cursor is always aligned between writes.
	'''

	data: bytearray

	def __init__(self, initial: bytes=b'') -> None:
		self.data = bytearray(initial)

	@property
	def position(self) -> int:
		return len(self.data)

	def align(self, boundary: int=4, pad: bytes=b'\x00'):
		target = calculate_alignment(self.position, boundary)
		self.data.extend(pad * (target - self.position))

	def write(self, payload: bytes) -> tuple[int, int]:
		''' Appends a payload, returning its (byteOffset, padded byteLength). '''
		self.align()
		offset = self.position
		self.data.extend(payload)
		self.align()
		return (offset, calculate_alignment(len(payload), 4))

	def getvalue(self) -> bytes:
		return bytes(self.data)

def write_to_buffer(texture: Texture, mapType: TextureMapType, buffer: BufferWriter, settings: ExportSettings, inspector: SourceAssetInspector, pool: SurfacePool=surfaces) -> BufferImage:
	'''
	Encodes a texture into the shared buffer. The payload is produced in full
	before the buffer is touched.
	'''

	source = resolve(texture, mapType, settings, inspector)
	if source is not None:
		payload = source.read()
		mimeType = source.mimeType
	else:
		fmt = decide(texture, mapType, settings, inspector)
		payload = render(texture, mapType, fmt, settings, pool)
		mimeType = fmt.mimeType

	offset, length = buffer.write(payload)
	log.info(f'Embedded {mapType.name} image for {texture} at {offset} ({len(payload)} bytes)')
	return BufferImage(offset, length, mimeType)
