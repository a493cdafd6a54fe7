from enum import IntEnum

class TextureMapType(IntEnum):
	''' How a texture is used by a material. Decides conversion and alpha rules. '''
	Main						= 0
	Bump						= 1
	SpecGloss					= 2
	Emission					= 3
	MetallicGloss				= 4
	Light						= 5
	Occlusion					= 6
	MetallicGloss_DontConvert	= 7
	CubeMap						= 8
	Custom_Unknown				= 9

class ColorSpace(IntEnum):
	Raw				= 0
	GammaCorrected	= 1

class TextureShape(IntEnum):
	Texture2D	= 1
	Cube		= 2
	Array2D		= 4
	Texture3D	= 8

class AlphaSource(IntEnum):
	NoAlpha			= 0
	FromInput		= 1
	FromGrayScale	= 2

''' Host sampler settings '''

class WrapMode(IntEnum):
	Repeat		= 0
	Clamp		= 1
	Mirror		= 2
	MirrorOnce	= 3

class FilterMode(IntEnum):
	Point		= 0
	Bilinear	= 1
	Trilinear	= 2

class PixelFormat(IntEnum):
	Alpha8		= 1
	ARGB4444	= 2
	RGB24		= 3
	RGBA32		= 4
	ARGB32		= 5
	RGB565		= 7
	R16			= 9
	DXT1		= 10
	DXT5		= 12
	RGBA4444	= 13
	BGRA32		= 14
	RHalf		= 15
	RGHalf		= 16
	RGBAHalf	= 17
	RFloat		= 18
	RGFloat		= 19
	RGBAFloat	= 20
	BC4			= 26
	BC5			= 27
	BC6H		= 24
	BC7			= 25
	R8			= 63
	RG16		= 62

	@staticmethod
	def has_alpha(fmt: 'PixelFormat'):
		return fmt in (
			PixelFormat.Alpha8, PixelFormat.ARGB4444, PixelFormat.RGBA32, PixelFormat.ARGB32,
			PixelFormat.DXT5, PixelFormat.RGBA4444, PixelFormat.BGRA32, PixelFormat.RGBAHalf,
			PixelFormat.RGBAFloat, PixelFormat.BC7)

''' glTF sampler constants '''

class GLTFWrapMode(IntEnum):
	ClampToEdge		= 33071
	MirroredRepeat	= 33648
	Repeat			= 10497

class MinFilterMode(IntEnum):
	Nearest					= 9728
	Linear					= 9729
	NearestMipmapNearest	= 9984
	LinearMipmapNearest		= 9985
	NearestMipmapLinear		= 9986
	LinearMipmapLinear		= 9987

class MagFilterMode(IntEnum):
	Nearest	= 9728
	Linear	= 9729
