from .enums import TextureMapType
from .texture import Texture

Key = tuple[Texture, TextureMapType]

class Registry():
	'''
	Remembers which ids were handed out during one export session.
	Keys use texture identity, never pixel equality.
	'''

	images: dict[Key, int]
	textures: dict[Key, int]
	samplers: dict[Texture, int]

	def __init__(self) -> None:
		self.images = {}
		self.textures = {}
		self.samplers = {}

	def get_image_id(self, texture: Texture, mapType: TextureMapType) -> int|None:
		return self.images.get((texture, mapType))

	def get_texture_id(self, texture: Texture, mapType: TextureMapType) -> int|None:
		return self.textures.get((texture, mapType))

	def get_sampler_id(self, texture: Texture) -> int|None:
		return self.samplers.get(texture)

	def add_image(self, texture: Texture, mapType: TextureMapType, id: int):
		assert (texture, mapType) not in self.images, f'{texture} already has an image for {mapType.name}'
		self.images[(texture, mapType)] = id

	def add_texture(self, texture: Texture, mapType: TextureMapType, id: int):
		assert (texture, mapType) not in self.textures, f'{texture} already has a texture for {mapType.name}'
		self.textures[(texture, mapType)] = id

	def add_sampler(self, texture: Texture, id: int):
		assert texture not in self.samplers, f'{texture} already has a sampler'
		self.samplers[texture] = id

	def clear(self):
		self.images.clear()
		self.textures.clear()
		self.samplers.clear()
