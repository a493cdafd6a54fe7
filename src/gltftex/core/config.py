from traceback import format_exc
from dataclasses import dataclass, asdict, fields

from pathlib import Path
import logging as log
import json

SETTINGS_NAME = 'gltfexport.json'

@dataclass
class ExportSettings():
	exportNames: bool = True
	''' If true, texture and image names are written to the document. '''
	tryExportTexturesFromDisk: bool = False
	''' If true, PNG/JPEG source assets are copied verbatim when no conversion is required. '''
	exportFullPath: bool = False
	''' If true, the texture's full relative path is kept in the output path instead of just the filename. '''
	useTextureFileTypeHeuristic: bool = True
	''' If true, textures without alpha are written as JPEG. '''
	defaultJpegQuality: int = 90
	''' JPEG quality (0-100) used whenever an image is encoded as JPEG. '''
	useInternalBuffer: bool = False
	''' If true, images are embedded in the binary buffer instead of written as files. '''

	def __post_init__(self):
		if not 0 <= self.defaultJpegQuality <= 100:
			raise ValueError(f'JPEG quality must be within 0-100, but got {self.defaultJpegQuality}!')

	def encode(self):
		return asdict(self)

	def copy(self):
		return ExportSettings(**asdict(self))

	@staticmethod
	def decode(data) -> 'ExportSettings':
		assert isinstance(data, dict)
		known = { f.name for f in fields(ExportSettings) }
		for key in data:
			if key not in known: log.warning(f'Ignoring unknown export setting "{key}"')
		return ExportSettings(**{ k: v for k, v in data.items() if k in known })

def load_settings(path: str|Path|None=None) -> ExportSettings:
	settings_path = Path(path) if path != None else Path('./') / SETTINGS_NAME
	if settings_path.is_dir():
		settings_path = settings_path / SETTINGS_NAME

	if not settings_path.is_file():
		log.info('Using default export settings...')
		return ExportSettings()

	try:
		with open(settings_path, 'rb') as file:
			log.info(f'Reading export settings from {settings_path}...')
			return ExportSettings.decode(json.load(file))

	except (json.JSONDecodeError, AssertionError, TypeError, ValueError):
		log.warning(f'Failed to parse the export settings! Falling back to defaults.\n\n{format_exc()}')
		return ExportSettings()

def save_settings(settings: ExportSettings, path: str|Path):
	with open(path, 'w') as file:
		json.dump(settings.encode(), file, indent='\t')
