import sys

from blogrender.core.config import get_settings
from blogrender.services.highlight import highlight_css

path = sys.argv[1] if len(sys.argv) > 1 else "highlight.css"
with open(path, "w") as f:
    f.write(highlight_css(get_settings().highlight_style))
print(f"Written {path}")
