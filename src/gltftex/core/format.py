from dataclasses import dataclass
from urllib.parse import quote
import posixpath

from .enums import TextureMapType, ColorSpace, AlphaSource, PixelFormat
from .config import ExportSettings
from .inspector import SourceAssetInspector
from .texture import Texture, Texture2D
from .io.image import MIME_PNG, MIME_JPEG
from . import disk

# Characters kept as-is in the directory part of an image URI
URI_SAFE = "/;:@&=+$,!~*'()#?[]"

NO_ALPHA_TYPES = (
	TextureMapType.MetallicGloss,
	TextureMapType.MetallicGloss_DontConvert,
	TextureMapType.Light,
	TextureMapType.Occlusion,
	TextureMapType.Bump,
)

RAW_READ_TYPES = NO_ALPHA_TYPES

@dataclass(frozen=True)
class ImageFormat():
	hasAlpha: bool
	canUseJpeg: bool
	colorSpace: ColorSpace

	@property
	def extension(self) -> str:
		return '.jpg' if self.canUseJpeg else '.png'

	@property
	def mimeType(self) -> str:
		return MIME_JPEG if self.canUseJpeg else MIME_PNG

def texture_has_alpha(texture: Texture, inspector: SourceAssetInspector) -> bool:
	''' Guesses whether a texture carries meaningful alpha from its import settings and native format. '''

	has_alpha = False

	importer = inspector.importer(texture) if isinstance(texture, Texture2D) else None
	if importer is not None:
		match importer.alphaSource:
			case AlphaSource.FromInput:		has_alpha = importer.sourceHasAlpha
			case AlphaSource.FromGrayScale:	has_alpha = True
			case AlphaSource.NoAlpha:		has_alpha = False

	# Without format introspection there is no way to rule alpha out
	if texture.pixelFormat is None:
		return True

	return has_alpha or PixelFormat.has_alpha(texture.pixelFormat)

def has_alpha(texture: Texture, mapType: TextureMapType, inspector: SourceAssetInspector) -> bool:
	if mapType == TextureMapType.CubeMap: return True
	if mapType in NO_ALPHA_TYPES: return False
	return texture_has_alpha(texture, inspector)

def color_space(texture: Texture, mapType: TextureMapType, inspector: SourceAssetInspector) -> ColorSpace:
	''' The space pixels are read in before conversion. '''

	if mapType in RAW_READ_TYPES:
		return ColorSpace.Raw

	if mapType == TextureMapType.Custom_Unknown:
		importer = inspector.importer(texture)
		if importer is not None and importer.srgb:
			return ColorSpace.GammaCorrected
		return ColorSpace.Raw

	return ColorSpace.GammaCorrected

def decide(texture: Texture, mapType: TextureMapType, settings: ExportSettings, inspector: SourceAssetInspector) -> ImageFormat:
	alpha = has_alpha(texture, mapType, inspector)
	return ImageFormat(
		hasAlpha=alpha,
		canUseJpeg=not alpha and settings.useTextureFileTypeHeuristic,
		colorSpace=color_space(texture, mapType, inspector))


''' Output paths '''

def change_extension(path: str, extension: str) -> str:
	root, _ = posixpath.splitext(path)
	return root + extension

def output_path(texture: Texture, mapType: TextureMapType, settings: ExportSettings, inspector: SourceAssetInspector) -> tuple[str, ImageFormat, 'disk.DiskSource|None']:
	'''
	Resolves the relative output path of an external image. Returns the path,
	the format decision, and the disk source when the file is copied verbatim.
	'''

	image_path = inspector.texture_path(texture) or texture.name
	image_path = image_path.replace('\\', '/')

	source = disk.resolve(texture, mapType, settings, inspector)
	if source is not None:
		image_path = source.path

	fmt = decide(texture, mapType, settings, inspector)

	if not settings.exportFullPath:
		image_path = posixpath.basename(image_path)

	if source is None:
		image_path = change_extension(image_path, fmt.extension)

	return (image_path, fmt, source)

def image_uri(path: str) -> str:
	'''
	Escapes a relative image path for use as a URI. Reserved characters such as
	"#" are valid in the directory part but must be escaped in the filename.
	'''
	directory, filename = posixpath.split(path.replace('\\', '/'))
	filename = quote(filename, safe='')
	if not directory:
		return filename
	return quote(directory, safe=URI_SAFE) + '/' + filename
