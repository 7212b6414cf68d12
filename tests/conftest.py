# Keep Qt headless for the header binding tests.

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
