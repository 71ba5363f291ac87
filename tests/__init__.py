"""
Test suite for the pdfstencil package.

Template machinery is tested against MemorySurface; the ReportLab surface,
canvas adapter and CLI tests render real PDF documents.
"""

import sys
from pathlib import Path

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))
