"""
Запись BMP файлов без использования готовых библиотек.
Реализует сохранение Bitmap в формат BMP 24 бита без сжатия.
"""

import logging
import struct
from typing import BinaryIO

from bitmap import Bitmap
from bmp_format import (
    BITS_PER_PIXEL,
    BMP_MAGIC,
    COMPRESSION_NONE,
    FILE_HEADER_FORMAT,
    HEADER_SIZE,
    INFO_HEADER_FORMAT,
    INFO_HEADER_SIZE,
    BitmapIOError,
    image_size,
    row_padding,
)

logger = logging.getLogger(__name__)


class BMPWriter:
    """Класс для записи BMP файлов"""

    def __init__(self, bitmap: Bitmap):
        self.bitmap = bitmap
        self.width, self.height = bitmap.size()

    def create_file_header(self) -> bytes:
        """Создаёт заголовок файла (14 байт)"""
        # Размер файла считается без учёта выравнивания строк
        file_size = HEADER_SIZE + image_size(self.width, self.height)
        return struct.pack(FILE_HEADER_FORMAT, BMP_MAGIC, file_size, 0, HEADER_SIZE)

    def create_info_header(self) -> bytes:
        """Создаёт информационный заголовок (40 байт)"""
        return struct.pack(
            INFO_HEADER_FORMAT,
            INFO_HEADER_SIZE,
            self.width,
            self.height,
            1,  # planes
            BITS_PER_PIXEL,
            COMPRESSION_NONE,
            image_size(self.width, self.height),
            0, 0, 0, 0  # разрешение по x и y, размер палитры, важные цвета
        )

    def prepare_image_data(self) -> bytes:
        """Подготавливает строки пикселей снизу вверх с выравниванием"""
        if self.width == 0:
            return b''

        image_data = bytearray()
        padding = b'\x00' * row_padding(self.width)

        for row in reversed(self.bitmap.to_rows()):
            for r, g, b in row:
                image_data.extend((b, g, r))
            image_data.extend(padding)

        return bytes(image_data)

    def to_bytes(self) -> bytes:
        """Возвращает содержимое BMP файла целиком"""
        return self.create_file_header() + self.create_info_header() + self.prepare_image_data()

    def write_stream(self, stream: BinaryIO):
        """Записывает BMP в открытый двоичный поток"""
        stream.write(self.to_bytes())

    def write(self, file_path: str):
        """Записывает BMP файл"""
        data = self.to_bytes()
        try:
            with open(file_path, 'wb') as f:
                f.write(data)
        except OSError as e:
            raise BitmapIOError(e.errno, f"Не удалось записать BMP: {e.strerror or e}", file_path) from e

        logger.debug("Записан BMP %s: %dx%d, %d байт", file_path, self.width, self.height, len(data))


def write_to_file(bitmap: Bitmap, file_path: str):
    """Сохраняет изображение в BMP файл"""
    BMPWriter(bitmap).write(file_path)
