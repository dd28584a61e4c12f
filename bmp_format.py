"""
Константы формата BMP (24 бита, без сжатия, строки снизу вверх) и ошибки кодека.
"""

# Сигнатура 'BM' как little-endian число
BMP_MAGIC = 19778
BMP_SIGNATURE = b'BM'

FILE_HEADER_SIZE = 14
INFO_HEADER_SIZE = 40
HEADER_SIZE = FILE_HEADER_SIZE + INFO_HEADER_SIZE  # 54 байта

BITS_PER_PIXEL = 24
BYTES_PER_PIXEL = 3
COMPRESSION_NONE = 0

# H: сигнатура, I: размер файла, I: резерв, I: смещение данных
FILE_HEADER_FORMAT = '<HIII'
# I: размер заголовка, I: ширина, I: высота, H: planes, H: bpp,
# I: сжатие, I: размер данных, I x4: разрешения и палитра.
# planes, bpp и сжатие вместе - 8 байт со значением 1 | (24 << 16) = 1572865
INFO_HEADER_FORMAT = '<IIIHHIIIIII'


def row_padding(width: int) -> int:
    """Число нулевых байт в конце строки, чтобы её длина делилась на 4"""
    return -(BYTES_PER_PIXEL * width) % 4


def row_size(width: int) -> int:
    """Длина строки пикселей в файле вместе с выравниванием"""
    return BYTES_PER_PIXEL * width + row_padding(width)


def image_size(width: int, height: int) -> int:
    """Размер данных пикселей без выравнивания, как он пишется в заголовок"""
    return BYTES_PER_PIXEL * width * height


class BitmapError(Exception):
    """Базовый класс ошибок кодека BMP"""


class UnsupportedFormatError(BitmapError, ValueError):
    """Файл не является BMP 24 бита без сжатия"""


class BitmapIOError(BitmapError, OSError):
    """Файл не удалось открыть, прочитать или записать"""
