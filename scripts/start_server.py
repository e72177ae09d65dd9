"""Start the server"""

import asyncio
import sys
import logging
from pathlib import Path

# make the src layout importable without installation
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


def check_environment():
    """Check the runtime environment"""
    logger.info("Checking runtime environment...")

    if sys.version_info < (3, 10):
        logger.error(f"Python too old: {sys.version_info}, 3.10+ required")
        return False

    try:
        import fastapi
        import httpx
        import pydantic
        import pydantic_settings
        import pytz
        import aiofiles
        logger.info("✅ All required packages installed")
        return True
    except ImportError as e:
        logger.error(f"❌ Missing package: {e}")
        logger.error("Run: pip install -e .")
        return False


def main():
    try:
        if not check_environment():
            sys.exit(1)

        from bahn_bestpreis.server import main_server

        logger.info("🚀 Starting Bahn Bestpreis server...")
        asyncio.run(main_server())

    except ImportError as e:
        logger.error(f"❌ Import error: {e}")
        logger.error("Make sure the dependencies are installed: pip install -e .")
        sys.exit(1)
    except Exception as e:
        logger.error(f"❌ Startup failed: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
