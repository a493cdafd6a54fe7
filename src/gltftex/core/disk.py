from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from .enums import TextureMapType, TextureShape
from .config import ExportSettings
from .inspector import SourceAssetInspector
from .texture import Texture
from .io.image import MIME_PNG, MIME_JPEG
import logging as log

@dataclass(frozen=True)
class DiskSource():
	''' A source asset whose encoded bytes can be copied verbatim. '''
	source: Path
	''' The file to read. '''
	path: str
	''' The path the copy is exported under. Differs from `source` for sub-assets. '''

	@property
	def mimeType(self) -> str:
		return MIME_JPEG if is_jpeg(self.source) else MIME_PNG

	def read(self) -> bytes:
		with open(self.source, 'rb') as file:
			return file.read()

def is_png(path: str|Path) -> bool:
	return PurePosixPath(str(path)).suffix.lower().endswith('png')

def is_jpeg(path: str|Path) -> bool:
	suffix = PurePosixPath(str(path)).suffix.lower()
	return suffix.endswith('jpg') or suffix.endswith('jpeg')

def can_export_from_disk(texture: Texture, mapType: TextureMapType, inspector: SourceAssetInspector) -> Path|None:
	''' Returns the source asset path when its bytes are usable as-is for this map type. '''

	path = inspector.asset_path(texture)
	if path is None: return None

	importer = inspector.importer(texture)
	if importer is None or importer.shape != TextureShape.Texture2D:
		return None

	match mapType:
		case TextureMapType.Bump:
			# Normals generated from a grayscale source only exist after import
			if importer.convertToNormalmap:
				return None
		case TextureMapType.MetallicGloss | TextureMapType.SpecGloss:
			# Gloss lives in alpha and must be repacked
			if importer.sourceHasAlpha:
				return None

	path = Path(path)
	if not path.is_file():
		return None
	return path

def export_path(source: Path, root: Path|None) -> str:
	'''
	Relative path a copied source file is written under. Paths inside the
	project root lose that prefix, any other path loses its anchor and parent
	references so the copy always lands inside the output directory.
	'''
	if root is not None and source.is_relative_to(root):
		return source.relative_to(root).as_posix()

	parts = source.parts[1:] if source.anchor else source.parts
	return PurePosixPath(*[p for p in parts if p != '..']).as_posix()

def resolve(texture: Texture, mapType: TextureMapType, settings: ExportSettings, inspector: SourceAssetInspector) -> DiskSource|None:
	''' Decides whether a texture is exported by copying its source file. '''

	if not settings.tryExportTexturesFromDisk:
		return None

	source = can_export_from_disk(texture, mapType, inspector)
	if source is None:
		return None

	if not (is_png(source) or is_jpeg(source)):
		log.warning(f'Texture can\'t be exported from disk: {source}. Only PNG & JPEG are supported. The texture will be re-encoded.')
		return None

	path = export_path(source, inspector.project_root())
	if not inspector.main_asset_is_texture2d(source):
		# Several textures share this file, keep their outputs apart
		path = str(PurePosixPath(path).with_name(f'{source.stem}-{texture.name}{source.suffix}'))

	log.debug(f'Exporting {texture} from disk: {source}')
	return DiskSource(source, path)
