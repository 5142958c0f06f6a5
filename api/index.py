import os
import sys
import logging

# Add the parent directory to the path
current_dir = os.path.dirname(os.path.abspath(__file__))
parent_dir = os.path.dirname(current_dir)
sys.path.insert(0, parent_dir)

# Setup environment
os.environ.setdefault('FLASK_ENV', 'production')

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

from web_interface import app

logger.info("✅ web_interface imported successfully")

# This is the entry point for Vercel
