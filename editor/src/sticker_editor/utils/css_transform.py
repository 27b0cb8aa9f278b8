"""
CSS Transform Parser/Serializer

Parses the serialized 2D transform strings emitted by the manipulation
surface into AffineTransform2D and serializes them back.

Grammar (whitespace allowed between all tokens):

	transform  := "" | "none" | function+
	function   := name "(" args ")"
	name       := matrix | translate | translateX | translateY
	              | scale | scaleX | scaleY | rotate
	args       := number ( [","] number )*

Lengths accept "px" or no unit, angles accept deg, rad, grad and turn (a bare
0 is allowed). Functions compose left to right as in CSS. Anything else is
rejected with TransformParseError; the producer is not trusted.
"""

import math
import re
from typing import List, Tuple

from sticker_editor.errors import TransformParseError
from sticker_editor.models.transform import AffineTransform2D


_NUMBER_RE = re.compile(r'[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')
_UNIT_RE = re.compile(r'[a-zA-Z%]*')

_ANGLE_UNITS = {
	'deg': math.pi / 180.0,
	'rad': 1.0,
	'grad': math.pi / 200.0,
	'turn': 2.0 * math.pi,
}

_LENGTH_UNITS = ('', 'px')

# name -> (min args, max args, kind)
_FUNCTIONS = {
	'matrix': (6, 6, 'number'),
	'translate': (1, 2, 'length'),
	'translatex': (1, 1, 'length'),
	'translatey': (1, 1, 'length'),
	'scale': (1, 2, 'number'),
	'scalex': (1, 1, 'number'),
	'scaley': (1, 1, 'number'),
	'rotate': (1, 1, 'angle'),
}


class CSSTransformParser:
	"""Recursive-descent parser for CSS 2D transform lists"""

	def __init__(self):
		self.pos = 0
		self.text = ""

	def parse(self, text: str) -> AffineTransform2D:
		"""Parse a transform string and return the composed matrix"""
		if text is None:
			text = ""
		self.text = text
		self.pos = 0

		self.skip_whitespace()
		if self.pos >= len(self.text):
			return AffineTransform2D.identity()

		# "none" is only valid on its own
		if self.text[self.pos:].strip().lower() == 'none':
			return AffineTransform2D.identity()

		result = AffineTransform2D.identity()
		while True:
			self.skip_whitespace()
			if self.pos >= len(self.text):
				break
			result = result @ self.parse_function()
		return result

	def skip_whitespace(self):
		"""Skip whitespace between tokens"""
		while self.pos < len(self.text) and self.text[self.pos].isspace():
			self.pos += 1

	def error(self, message: str):
		raise TransformParseError(message, self.text, self.pos)

	def expect(self, char: str):
		"""Consume ``char`` or fail"""
		self.skip_whitespace()
		if self.pos >= len(self.text) or self.text[self.pos] != char:
			self.error(f"Expected '{char}'")
		self.pos += 1

	def read_identifier(self) -> str:
		"""Read a function name"""
		self.skip_whitespace()
		start = self.pos
		while self.pos < len(self.text) and self.text[self.pos].isalnum():
			self.pos += 1
		return self.text[start:self.pos]

	def read_number(self) -> Tuple[float, str]:
		"""Read a number and its (possibly empty) unit"""
		self.skip_whitespace()
		match = _NUMBER_RE.match(self.text, self.pos)
		if not match:
			self.error("Expected a number")
		self.pos = match.end()

		unit = _UNIT_RE.match(self.text, self.pos).group(0)
		self.pos += len(unit)

		# Arguments must be separated, e.g. "10px20px" is rejected
		if self.pos < len(self.text) and not (self.text[self.pos].isspace() or self.text[self.pos] in ',)'):
			self.error("Expected ',' or ')' after number")

		value = float(match.group(0))
		if not math.isfinite(value):
			self.error("Number out of range")
		return value, unit.lower()

	def read_arguments(self) -> List[Tuple[float, str]]:
		"""Read a parenthesized, comma or whitespace separated argument list"""
		self.expect('(')
		args = []
		while True:
			self.skip_whitespace()
			if self.pos < len(self.text) and self.text[self.pos] == ')':
				if not args:
					self.error("Empty argument list")
				self.pos += 1
				return args

			if args:
				# Separator is a comma or plain whitespace
				if self.text[self.pos] == ',':
					self.pos += 1
			args.append(self.read_number())

			self.skip_whitespace()
			if self.pos >= len(self.text):
				self.error("Unterminated argument list")

	def parse_function(self) -> AffineTransform2D:
		"""Parse one transform function into a matrix"""
		start = self.pos
		name = self.read_identifier()
		if not name:
			self.error("Expected a transform function")

		key = name.lower()
		if key not in _FUNCTIONS:
			self.pos = start
			self.error(f"Unsupported transform function '{name}'")

		min_args, max_args, kind = _FUNCTIONS[key]
		args = self.read_arguments()
		if not min_args <= len(args) <= max_args:
			self.pos = start
			self.error(f"{name}() takes {min_args}-{max_args} arguments, got {len(args)}")

		values = [self._convert(value, unit, kind, name, start) for value, unit in args]

		if key == 'matrix':
			return AffineTransform2D(*values)
		if key == 'translate':
			return AffineTransform2D.translation(values[0], values[1] if len(values) == 2 else 0.0)
		if key == 'translatex':
			return AffineTransform2D.translation(values[0], 0.0)
		if key == 'translatey':
			return AffineTransform2D.translation(0.0, values[0])
		if key == 'scale':
			return AffineTransform2D.scaling(values[0], values[1] if len(values) == 2 else values[0])
		if key == 'scalex':
			return AffineTransform2D.scaling(values[0], 1.0)
		if key == 'scaley':
			return AffineTransform2D.scaling(1.0, values[0])
		return AffineTransform2D.rotation(values[0])

	def _convert(self, value, unit, kind, name, start):
		"""Resolve a unit into layout units / radians"""
		if kind == 'number':
			if unit:
				self.pos = start
				self.error(f"{name}() takes unitless numbers, got '{unit}'")
			return value
		if kind == 'length':
			if unit not in _LENGTH_UNITS:
				self.pos = start
				self.error(f"Unsupported length unit '{unit}' in {name}()")
			return value
		# angle
		if not unit:
			if value != 0:
				self.pos = start
				self.error(f"{name}() needs an angle unit")
			return 0.0
		if unit not in _ANGLE_UNITS:
			self.pos = start
			self.error(f"Unsupported angle unit '{unit}' in {name}()")
		return value * _ANGLE_UNITS[unit]


def parse_css_transform(text: str) -> AffineTransform2D:
	"""Parse a CSS transform string into an AffineTransform2D

	Raises:
		TransformParseError: text is not a supported 2D transform list
	"""
	parser = CSSTransformParser()
	return parser.parse(text)


def _format_number(value: float) -> str:
	"""Shortest round-trippable form, without '-0'"""
	if value == 0:
		return '0'
	return repr(float(value)) if not float(value).is_integer() else str(int(value))


def format_css_matrix(matrix: AffineTransform2D) -> str:
	"""Serialize as ``matrix(a, b, c, d, tx, ty)``"""
	return 'matrix({})'.format(', '.join(_format_number(v) for v in matrix))
