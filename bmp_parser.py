"""
Парсер BMP файлов без использования готовых библиотек.
Реализует чтение BMP 24 бита без сжатия в объект Bitmap.
"""

import io
import logging
import struct
from typing import BinaryIO

from bitmap import Bitmap, Color24
from bmp_format import (
    BITS_PER_PIXEL,
    BMP_MAGIC,
    COMPRESSION_NONE,
    HEADER_SIZE,
    INFO_HEADER_SIZE,
    BitmapIOError,
    UnsupportedFormatError,
    row_size,
)

logger = logging.getLogger(__name__)


class BMPParser:
    """Парсер для BMP файлов"""

    def __init__(self, file_path: str):
        self.file_path = file_path
        self.header = {}

    def read_bytes(self, file: BinaryIO, count: int) -> bytes:
        """Читает несколько байт из файла"""
        data = file.read(count)
        if len(data) < count:
            raise EOFError("Неожиданный конец файла")
        return data

    def read_uint16_le(self, file: BinaryIO) -> int:
        """Читает 16-битное беззнаковое число (little-endian)"""
        return struct.unpack('<H', self.read_bytes(file, 2))[0]

    def read_uint32_le(self, file: BinaryIO) -> int:
        """Читает 32-битное беззнаковое число (little-endian)"""
        return struct.unpack('<I', self.read_bytes(file, 4))[0]

    def parse_header(self, file: BinaryIO) -> dict:
        """Парсит заголовок файла и информационный заголовок (54 байта)"""
        try:
            header = {
                'magic': self.read_uint16_le(file),
                'file_size': self.read_uint32_le(file),
                'reserved': self.read_uint32_le(file),
                'data_offset': self.read_uint32_le(file),
                'info_size': self.read_uint32_le(file),
                'width': self.read_uint32_le(file),
                'height': self.read_uint32_le(file),
                'planes': self.read_uint16_le(file),
                'bits_per_pixel': self.read_uint16_le(file),
                'compression': self.read_uint32_le(file),
                'image_size': self.read_uint32_le(file),
                'x_resolution': self.read_uint32_le(file),
                'y_resolution': self.read_uint32_le(file),
                'colors_used': self.read_uint32_le(file),
                'colors_important': self.read_uint32_le(file),
            }
        except EOFError as e:
            raise UnsupportedFormatError("Файл короче заголовка BMP") from e

        if header['magic'] != BMP_MAGIC:
            raise UnsupportedFormatError(f"Неверная сигнатура BMP: {header['magic']:#06x}")
        if header['bits_per_pixel'] != BITS_PER_PIXEL:
            raise UnsupportedFormatError(
                f"Поддерживается только {BITS_PER_PIXEL} бита на пиксель, "
                f"в файле {header['bits_per_pixel']}"
            )
        if header['compression'] != COMPRESSION_NONE:
            raise UnsupportedFormatError(f"Сжатие не поддерживается: {header['compression']}")

        logger.debug("Заголовок BMP: %s", header)
        self.header = header
        return header

    def skip_to_pixel_data(self, file: BinaryIO, data_offset: int):
        """Пропускает байты между заголовком и началом данных пикселей"""
        extra = data_offset - HEADER_SIZE
        if extra < 0:
            logger.warning("Смещение данных %d внутри заголовка, читаем данные сразу после него",
                           data_offset)
        elif extra > 0:
            logger.warning("Нестандартный заголовок BMP: пропускаем %d байт до данных", extra)
            try:
                self.read_bytes(file, extra)
            except EOFError as e:
                raise UnsupportedFormatError("Смещение данных за концом файла") from e

    def read_pixels(self, file: BinaryIO, width: int, height: int) -> Bitmap:
        """Читает строки пикселей снизу вверх"""
        stride = row_size(width)
        try:
            data = self.read_bytes(file, stride * height)
        except EOFError as e:
            raise UnsupportedFormatError(
                f"Данных пикселей меньше, чем нужно для {width}x{height}"
            ) from e

        if width == 0:
            return Bitmap(0, height)

        bitmap = Bitmap(width, height)
        for y in range(height):
            # Первая строка в файле - нижняя строка изображения
            offset = (height - 1 - y) * stride
            for x in range(width):
                bitmap.set_at(x, y, Color24.from_bytes(data[offset:offset + 3]))
                offset += 3
        return bitmap

    def parse_stream(self, file: BinaryIO) -> Bitmap:
        """Парсит BMP из открытого двоичного потока"""
        header = self.parse_header(file)
        if header['info_size'] != INFO_HEADER_SIZE:
            logger.warning("Размер информационного заголовка %d вместо %d",
                           header['info_size'], INFO_HEADER_SIZE)
        self.skip_to_pixel_data(file, header['data_offset'])
        return self.read_pixels(file, header['width'], header['height'])

    def parse_bytes(self, data: bytes) -> Bitmap:
        """Парсит BMP из байтов в памяти"""
        return self.parse_stream(io.BytesIO(data))

    def parse(self) -> Bitmap:
        """Парсит BMP файл и возвращает изображение"""
        try:
            with open(self.file_path, 'rb') as f:
                data = f.read()
        except OSError as e:
            raise BitmapIOError(e.errno, f"Не удалось прочитать BMP: {e.strerror or e}", self.file_path) from e

        return self.parse_bytes(data)


def read_from_file(file_path: str) -> Bitmap:
    """Читает изображение из BMP файла"""
    return BMPParser(file_path).parse()


def read_into(bitmap: Bitmap, file_path: str):
    """Заполняет существующее изображение содержимым BMP файла.

    Изображение меняется только после успешного разбора всего файла.
    """
    parsed = read_from_file(file_path)
    bitmap.resize(*parsed.size())
    bitmap.insert(0, 0, parsed)
