from pathlib import Path
from pygltflib import GLTF2, Buffer, BufferView, TextureInfo
from pygltflib import Image as GLTFImage
from pygltflib import Texture as GLTFTexture

from .enums import TextureMapType
from .config import ExportSettings
from .inspector import SourceAssetInspector, NullInspector
from .texture import Texture, RenderTexture
from .registry import Registry
from .format import output_path, image_uri
from .sampler import make_sampler
from .texops import SurfacePool, surfaces
from .writer import PendingImageExport, BufferWriter, write_to_file, write_to_buffer
import logging as log

class TextureExporter():
	'''
	One texture export session. Appends images, textures and samplers to a
	glTF document, exporting each (texture, map type) pair at most once.

	With `useInternalBuffer` images are embedded immediately. Otherwise they are
	queued and written by `export_images()`.
	'''

	root: GLTF2
	settings: ExportSettings
	inspector: SourceAssetInspector
	registry: Registry
	pending: list[PendingImageExport]
	pool: SurfacePool
	buffer: BufferWriter|None = None
	bufferId: int|None = None

	def __init__(self,
			root: GLTF2|None=None,
			settings: ExportSettings|None=None,
			inspector: SourceAssetInspector|None=None,
			pool: SurfacePool=surfaces):

		self.root = root if root is not None else GLTF2()
		self.settings = settings or ExportSettings()
		self.inspector = inspector or NullInspector()
		self.pool = pool
		self.registry = Registry()
		self.pending = []

		if self.settings.useInternalBuffer:
			self.open_buffer()

	def open_buffer(self):
		'''
		Embedded images share buffer 0 with whatever the document already stores
		there, new payloads are appended after the existing binary blob.
		'''
		if not self.root.buffers:
			self.root.buffers.append(Buffer(byteLength=0))
		elif self.root.buffers[0].uri is not None:
			raise ValueError(f'Buffer 0 refers to external data ({self.root.buffers[0].uri}), images can not be embedded!')

		self.bufferId = 0
		self.buffer = BufferWriter(self.root.binary_blob() or b'')

	def name_texture(self, texture: Texture):
		''' Unnamed textures are named by their future texture id, starting at 1. '''
		if not texture.name:
			texture.name = str(len(self.root.textures) + 1)

	def export_texture_info(self, texture: Texture, mapType: TextureMapType) -> TextureInfo:
		return TextureInfo(index=self.export_texture(texture, mapType))

	def export_texture(self, texture: Texture, mapType: TextureMapType) -> int:
		if texture is None:
			raise ValueError('texture can not be None.')

		id = self.registry.get_texture_id(texture, mapType)
		if id is not None:
			log.debug(f'Reusing texture {id} for {texture} ({mapType.name})')
			return id

		self.name_texture(texture)

		gltf_texture = GLTFTexture()
		if self.settings.exportNames:
			gltf_texture.name = texture.name

		if self.settings.useInternalBuffer:
			gltf_texture.source = self.export_image_internal_buffer(texture, mapType)
		else:
			gltf_texture.source = self.export_image(texture, mapType)
		gltf_texture.sampler = self.export_sampler(texture)

		id = len(self.root.textures)
		self.root.textures.append(gltf_texture)
		self.registry.add_texture(texture, mapType, id)
		return id

	def export_image(self, texture: Texture, mapType: TextureMapType) -> int:
		''' Adds an external image and queues its file for `export_images()`. '''

		if texture is None:
			raise ValueError('texture can not be None.')

		id = self.registry.get_image_id(texture, mapType)
		if id is not None:
			return id

		self.name_texture(texture)
		image = GLTFImage()
		if self.settings.exportNames:
			image.name = texture.name

		path, fmt, source = output_path(texture, mapType, self.settings, self.inspector)
		image.uri = image_uri(path)

		# Freeze render target contents at reference time
		pixels = texture.snapshot() if isinstance(texture, RenderTexture) else texture
		self.pending.append(PendingImageExport(pixels, mapType, path, fmt, source))

		id = len(self.root.images)
		self.root.images.append(image)
		self.registry.add_image(texture, mapType, id)
		return id

	def export_image_internal_buffer(self, texture: Texture, mapType: TextureMapType) -> int:
		''' Embeds an image in the session buffer and adds a buffer view for it. '''

		if texture is None:
			raise ValueError('texture can not be None.')
		assert self.buffer is not None and self.bufferId is not None, 'Session was not created with useInternalBuffer!'

		id = self.registry.get_image_id(texture, mapType)
		if id is not None:
			return id

		self.name_texture(texture)
		embedded = write_to_buffer(texture, mapType, self.buffer, self.settings, self.inspector, self.pool)

		view_id = len(self.root.bufferViews)
		self.root.bufferViews.append(BufferView(
			buffer=self.bufferId,
			byteOffset=embedded.byteOffset,
			byteLength=embedded.byteLength))

		image = GLTFImage(mimeType=embedded.mimeType, bufferView=view_id)
		if self.settings.exportNames:
			image.name = texture.name

		id = len(self.root.images)
		self.root.images.append(image)
		self.registry.add_image(texture, mapType, id)
		return id

	def export_sampler(self, texture: Texture) -> int:
		id = self.registry.get_sampler_id(texture)
		if id is not None:
			return id

		id = len(self.root.samplers)
		self.root.samplers.append(make_sampler(texture))
		self.registry.add_sampler(texture, id)
		return id

	def export_images(self, outputPath: str|Path):
		''' Writes every queued external image, in the order they were referenced. '''
		log.info(f'Writing {len(self.pending)} images to {outputPath}...')
		written = 0
		try:
			for pending in self.pending:
				write_to_file(pending, outputPath, self.settings, self.pool)
				written += 1
		finally:
			# Entries that were not written stay queued
			del self.pending[:written]

	def finalize(self) -> GLTF2:
		''' Attaches the embedded image buffer to the document. '''
		if self.buffer is not None:
			self.buffer.align()
			self.root.buffers[self.bufferId].byteLength = self.buffer.position
			self.root.set_binary_blob(self.buffer.getvalue())
		return self.root
