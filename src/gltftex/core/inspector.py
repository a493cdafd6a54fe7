from dataclasses import dataclass
from pathlib import Path
from .enums import TextureShape, AlphaSource
from .texture import Texture

@dataclass
class ImporterInfo():
	''' Authoring-time import settings of a source asset. '''
	shape: TextureShape = TextureShape.Texture2D
	convertToNormalmap: bool = False
	''' The normal map is generated from a grayscale height source. '''
	alphaSource: AlphaSource = AlphaSource.FromInput
	sourceHasAlpha: bool = False
	srgb: bool = True

class SourceAssetInspector():
	'''
	Recovers source-asset metadata for a texture. The base implementation knows
	nothing, which is the correct behavior for runtime-only hosts.
	'''

	def texture_path(self, texture: Texture) -> str|None:
		''' Preferred relative output path for a texture, if the host has one. '''
		return None

	def project_root(self) -> Path|None:
		''' Directory that source asset paths are exported relative to. '''
		return None

	def asset_path(self, texture: Texture) -> Path|None:
		return None

	def importer(self, texture: Texture) -> ImporterInfo|None:
		return None

	def main_asset_is_texture2d(self, path: Path) -> bool:
		return True

NullInspector = SourceAssetInspector

class StaticInspector(SourceAssetInspector):
	''' Inspector backed by explicit per-texture mappings. '''

	def __init__(self,
			paths: dict[Texture, Path]|None=None,
			importers: dict[Texture, ImporterInfo]|None=None,
			texturePaths: dict[Texture, str]|None=None,
			subAssetPaths: set[Path]|None=None,
			projectRoot: Path|None=None) -> None:
		self.paths = paths or {}
		self.importers = importers or {}
		self.texturePaths = texturePaths or {}
		self.subAssetPaths = subAssetPaths or set()
		''' Source files whose main asset is not a plain 2D texture (atlases, models, ...). '''
		self.projectRoot = projectRoot

	def texture_path(self, texture: Texture) -> str|None:
		return self.texturePaths.get(texture)

	def project_root(self) -> Path|None:
		return self.projectRoot

	def asset_path(self, texture: Texture) -> Path|None:
		return self.paths.get(texture)

	def importer(self, texture: Texture) -> ImporterInfo|None:
		return self.importers.get(texture)

	def main_asset_is_texture2d(self, path: Path) -> bool:
		return Path(path) not in self.subAssetPaths
