"""
Pillow-backed rendering surface for the sacred geometry simulator
Draws with an HSB colour model into a PIL Image instead of a display
"""

import base64
from io import BytesIO

from PIL import Image, ImageColor, ImageDraw


def hsb_to_rgb(hue, saturation, brightness):
    """HSB (hue 0-360, saturation/brightness 0-100) to an RGB tuple"""
    hue = hue % 360
    saturation = max(0.0, min(100.0, saturation))
    brightness = max(0.0, min(100.0, brightness))
    return ImageColor.getrgb(f"hsv({hue:.3f},{saturation:.3f}%,{brightness:.3f}%)")


def hsba_to_rgba(hue, saturation, brightness, alpha=100):
    r, g, b = hsb_to_rgb(hue, saturation, brightness)
    a = int(round(max(0.0, min(100.0, alpha)) * 2.55))
    return (r, g, b, a)


class Canvas:
    def __init__(self, size):
        self.width, self.height = size
        self.image = Image.new('RGB', size, (0, 0, 0))
        # RGBA draw mode blends translucent fills onto the RGB image
        self.draw = ImageDraw.Draw(self.image, 'RGBA')

        self.offset = (0.0, 0.0)
        self.fill = None
        self.stroke = (255, 255, 255, 255)
        self.stroke_weight = 1.0
        self._stack = []

    def resize(self, width, height):
        """Replace the image with a new blank one of the given size"""
        self.width, self.height = int(width), int(height)
        self.image = Image.new('RGB', (self.width, self.height), (0, 0, 0))
        self.draw = ImageDraw.Draw(self.image, 'RGBA')

    def clear(self):
        """Fill the whole surface with black and reset the transform"""
        self.draw.rectangle([0, 0, self.width, self.height], fill=(0, 0, 0))
        self.offset = (0.0, 0.0)
        self._stack = []

    def get_size(self):
        """Return surface dimensions"""
        return (self.width, self.height)

    def to_data_url(self, quality=85):
        """Encode the current image as a base64 JPEG data URL"""
        buffer = BytesIO()
        self.image.save(buffer, format='JPEG', quality=quality)
        img_base64 = base64.b64encode(buffer.getvalue()).decode('utf-8')
        return f"data:image/jpeg;base64,{img_base64}"

    # Transform and style scope

    def push(self):
        self._stack.append((self.offset, self.fill, self.stroke, self.stroke_weight))

    def pop(self):
        if not self._stack:
            raise RuntimeError("pop() without matching push()")
        self.offset, self.fill, self.stroke, self.stroke_weight = self._stack.pop()

    def translate(self, dx, dy):
        self.offset = (self.offset[0] + dx, self.offset[1] + dy)

    def set_fill_color(self, hue, saturation, brightness, alpha=100):
        self.fill = hsba_to_rgba(hue, saturation, brightness, alpha)

    def no_fill(self):
        self.fill = None

    def set_stroke_color(self, hue, saturation, brightness, alpha=100):
        self.stroke = hsba_to_rgba(hue, saturation, brightness, alpha)

    def no_stroke(self):
        self.stroke = None

    def set_stroke_weight(self, weight):
        self.stroke_weight = max(0.0, float(weight))

    # Primitives

    def _width(self):
        # PIL needs an integer outline width of at least 1
        return max(1, int(round(self.stroke_weight)))

    def _xy(self, x, y):
        return (x + self.offset[0], y + self.offset[1])

    def draw_rect(self, x, y, w, h):
        left, top = self._xy(x, y)
        box = [left, top, left + w, top + h]
        self.draw.rectangle(box, fill=self.fill, outline=self.stroke,
                            width=self._width() if self.stroke else 0)

    def draw_ellipse(self, cx, cy, w, h):
        """Draw an ellipse of width w and height h centered on (cx, cy)"""
        x, y = self._xy(cx, cy)
        box = [x - w / 2, y - h / 2, x + w / 2, y + h / 2]
        self.draw.ellipse(box, fill=self.fill, outline=self.stroke,
                          width=self._width() if self.stroke else 0)

    def draw_polygon(self, points):
        """Draw a closed polygon through the given points"""
        flat_points = []
        for point in points:
            flat_points.extend(self._xy(point[0], point[1]))

        if self.fill is not None:
            self.draw.polygon(flat_points, fill=self.fill)
        if self.stroke is not None:
            # Outline drawn as a closed line so wide strokes keep their joints
            closed = flat_points + flat_points[:2]
            self.draw.line(closed, fill=self.stroke, width=self._width(), joint='curve')

    def draw_line(self, x1, y1, x2, y2):
        if self.stroke is None:
            return
        self.draw.line([self._xy(x1, y1), self._xy(x2, y2)], fill=self.stroke, width=self._width())
