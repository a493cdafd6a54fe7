from .version import __version__
from .core.io.image import Image
from .core.io.imio import ImIOBackend

Image.set_backend(ImIOBackend)

def init(logfile: str|None=None):
	''' Sets up logging for standalone use. '''
	from logging import DEBUG, basicConfig, FileHandler, root
	basicConfig(level=DEBUG)

	if logfile != None:
		root.addHandler(FileHandler(logfile))
