"""
Растровое изображение 24 бита на пиксель без использования готовых библиотек.
Хранит сетку пикселей и реализует простые операции рисования.
"""

from typing import Iterator, List, NamedTuple, Optional, Sequence, Tuple


class Color24(NamedTuple):
    """Цвет пикселя: три 8-битных канала"""

    r: int = 0
    g: int = 0
    b: int = 0

    @classmethod
    def validated(cls, r: int, g: int, b: int) -> 'Color24':
        """Создаёт цвет с проверкой диапазона каналов"""
        for name, value in (('r', r), ('g', g), ('b', b)):
            if not isinstance(value, int) or not 0 <= value <= 0xFF:
                raise ValueError(f"Канал {name} вне диапазона 0..255: {value!r}")
        return cls(r, g, b)

    @classmethod
    def from_int(cls, value: int) -> 'Color24':
        """Распаковывает цвет из 32-битного числа (младший байт = синий)"""
        return cls((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)

    def to_int(self) -> int:
        """Упаковывает цвет в 32-битное число, старший байт равен нулю"""
        return self.b | (self.g << 8) | (self.r << 16)

    def __int__(self) -> int:
        return self.to_int()

    @classmethod
    def from_bytes(cls, data: bytes) -> 'Color24':
        """Цвет из трёх байт в порядке файла (b, g, r)"""
        b, g, r = data[:3]
        return cls(r, g, b)

    def to_bytes(self) -> bytes:
        """Три байта в порядке файла (b, g, r)"""
        return bytes((self.b, self.g, self.r))


BLACK = Color24()


class BitmapIndexError(IndexError):
    """Обращение к пикселю за границами изображения"""


def _check_unsigned(**values: int):
    for name, value in values.items():
        if value < 0:
            raise ValueError(f"{name} не может быть отрицательным: {value}")


def _ordered(a: int, b: int) -> Tuple[int, int]:
    return (a, b) if a <= b else (b, a)


def _color(color: Tuple[int, int, int]) -> Color24:
    return Color24.validated(*color)


def _blank_rows(width: int, height: int) -> List[List[Color24]]:
    # У изображения нулевой ширины строки не хранятся
    if width == 0:
        return []
    return [[BLACK] * width for _ in range(height)]


class Bitmap:
    """Прямоугольная сетка пикселей width x height.

    Хранение построчное: ``rows[y][x]``. Координата x - столбец, y - строка,
    и во всех методах порядок аргументов одинаковый: сначала x, потом y.
    Геометрические операции не бросают исключений для прямоугольников,
    выходящих за границы, а обрезают их.
    """

    def __init__(self, width: int = 0, height: int = 0):
        _check_unsigned(width=width, height=height)
        self._width = width
        self._height = height
        self._rows = _blank_rows(width, height)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Tuple[int, int, int]]]) -> 'Bitmap':
        """Создаёт изображение из списка строк RGB кортежей"""
        height = len(rows)
        width = len(rows[0]) if rows else 0
        bitmap = cls()
        for y, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(f"Строка {y} имеет длину {len(row)}, ожидалось {width}")
        bitmap._rows = [[_color(pixel) for pixel in row] for row in rows] if width else []
        bitmap._width = width
        bitmap._height = height
        return bitmap

    def to_rows(self) -> List[List[Color24]]:
        """Возвращает копию пикселей в виде списка строк"""
        return list(self)

    # Копирование и перемещение

    def copy(self) -> 'Bitmap':
        """Создаёт независимую копию изображения"""
        clone = Bitmap()
        clone._rows = [row[:] for row in self._rows]
        clone._width = self._width
        clone._height = self._height
        return clone

    def __copy__(self) -> 'Bitmap':
        return self.copy()

    def __deepcopy__(self, memo) -> 'Bitmap':
        # Color24 неизменяемый, копии строк достаточно
        return self.copy()

    def move(self) -> 'Bitmap':
        """Передаёт хранилище новому объекту, исходный становится пустым 0x0"""
        moved = Bitmap()
        moved._rows, self._rows = self._rows, []
        moved._width, moved._height = self._width, self._height
        self._width = self._height = 0
        return moved

    # Размеры

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def size(self) -> Tuple[int, int]:
        """Возвращает (ширина, высота)"""
        return self._width, self._height

    # Доступ к пикселям

    def _check_bounds(self, x: int, y: int):
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise BitmapIndexError(
                f"Координаты ({x}, {y}) вне изображения {self._width}x{self._height}"
            )

    def at(self, x: int, y: int) -> Color24:
        """Возвращает пиксель (x, y) с проверкой границ"""
        self._check_bounds(x, y)
        return self._rows[y][x]

    def set_at(self, x: int, y: int, color: Tuple[int, int, int]):
        """Устанавливает пиксель (x, y) с проверкой границ"""
        self._check_bounds(x, y)
        self._rows[y][x] = _color(color)

    def __getitem__(self, key: Tuple[int, int]) -> Color24:
        x, y = key
        return self.at(x, y)

    def __setitem__(self, key: Tuple[int, int], color: Tuple[int, int, int]):
        x, y = key
        self.set_at(x, y, color)

    def __iter__(self) -> Iterator[List[Color24]]:
        """Перебирает копии строк сверху вниз"""
        for y in range(self._height):
            yield self._rows[y][:] if self._width else []

    def __eq__(self, other) -> bool:
        if not isinstance(other, Bitmap):
            return NotImplemented
        return self.size() == other.size() and self._rows == other._rows

    def __repr__(self) -> str:
        return f"Bitmap(width={self._width}, height={self._height})"

    # Изменение размеров

    def resize(self, width: int, height: int):
        """Меняет размер; новые пиксели чёрные, сохранённые не меняются"""
        _check_unsigned(width=width, height=height)
        if width == 0:
            self._rows = []
        else:
            del self._rows[height:]
            for row in self._rows:
                if len(row) > width:
                    del row[width:]
                else:
                    row.extend([BLACK] * (width - len(row)))
            while len(self._rows) < height:
                self._rows.append([BLACK] * width)
        self._width = width
        self._height = height

    def _clip_rect(self, xa: int, ya: int, xb: int, yb: int) -> Optional[Tuple[int, int, int, int]]:
        """Нормализует прямоугольник и обрезает его по границам.

        Возвращает None, если начало прямоугольника вне изображения.
        """
        xa, xb = _ordered(xa, xb)
        ya, yb = _ordered(ya, yb)
        if xa >= self._width or ya >= self._height:
            return None
        return xa, ya, min(xb, self._width), min(yb, self._height)

    def trim(self, xa: int, ya: int, xb: int, yb: int):
        """Обрезает изображение до прямоугольника [xa, xb) x [ya, yb)"""
        _check_unsigned(xa=xa, ya=ya, xb=xb, yb=yb)
        rect = self._clip_rect(xa, ya, xb, yb)
        if rect is None:
            return
        xa, ya, xb, yb = rect
        self._rows = [row[xa:xb] for row in self._rows[ya:yb]] if xb > xa else []
        self._width = xb - xa
        self._height = yb - ya

    # Рисование

    def fill(self, color: Tuple[int, int, int]):
        """Заливает всё изображение цветом"""
        color = _color(color)
        for row in self._rows:
            row[:] = [color] * self._width

    def fill_rect(self, xa: int, ya: int, xb: int, yb: int, color: Tuple[int, int, int]):
        """Заливает прямоугольник [xa, xb) x [ya, yb), лишнее отбрасывается"""
        _check_unsigned(xa=xa, ya=ya, xb=xb, yb=yb)
        self._fill_clipped(xa, ya, xb, yb, color)

    def _fill_clipped(self, xa: int, ya: int, xb: int, yb: int, color: Tuple[int, int, int]):
        color = _color(color)
        rect = self._clip_rect(xa, ya, xb, yb)
        if rect is None:
            return
        xa, ya, xb, yb = rect
        span = [color] * (xb - xa)
        for y in range(ya, yb):
            self._rows[y][xa:xb] = span

    def point(self, x: int, y: int, color: Tuple[int, int, int], size: int = 1):
        """Рисует квадрат со стороной size с центром в (x, y)"""
        _check_unsigned(x=x, y=y, size=size)
        if size == 0:
            return
        # При чётном размере квадрат смещён к меньшим координатам
        xa = x - (size - 1) // 2
        ya = y - (size - 1) // 2
        self._fill_clipped(max(xa, 0), max(ya, 0), xa + size, ya + size, color)

    def _stroke(self, center: int, size: int, limit: int) -> Tuple[int, int]:
        # Толщина линии: начало не левее 0, конец не дальше limit
        start = max(center - size // 2, 0)
        return start, min(start + size, limit)

    def line_vertical(self, x: int, ya: int, yb: int, color: Tuple[int, int, int], size: int = 1):
        """Вертикальная линия в столбце x от ya до yb толщиной size"""
        _check_unsigned(x=x, ya=ya, yb=yb, size=size)
        if size == 0:
            return
        ya, yb = _ordered(ya, yb)
        xa, xb = self._stroke(x, size, self._width)
        self._fill_clipped(xa, ya, xb, yb, color)

    def line_horizontal(self, xa: int, xb: int, y: int, color: Tuple[int, int, int], size: int = 1):
        """Горизонтальная линия в строке y от xa до xb толщиной size"""
        _check_unsigned(xa=xa, xb=xb, y=y, size=size)
        if size == 0:
            return
        xa, xb = _ordered(xa, xb)
        ya, yb = self._stroke(y, size, self._height)
        self._fill_clipped(xa, ya, xb, yb, color)

    def insert(self, x: int, y: int, other: 'Bitmap'):
        """Копирует other в позицию (x, y); часть за границами отбрасывается"""
        if not isinstance(other, Bitmap):
            raise TypeError(f"Ожидался Bitmap, получен {type(other).__name__}")
        _check_unsigned(x=x, y=y)
        x_end = min(self._width, x + other._width)
        y_end = min(self._height, y + other._height)
        if x >= x_end:
            return
        for src_row, y_dst in zip(other._rows, range(y, y_end)):
            self._rows[y_dst][x:x_end] = src_row[:x_end - x]
