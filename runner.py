import logging
import os
from config import Config
from portfolio import create_app, db

logging.basicConfig(
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    level=getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO)
)
logger = logging.getLogger(__name__)

def main():
    """Start the portfolio server and release the connection pool on shutdown."""
    port = int(os.environ.get('PORT', 3000))
    app = create_app()

    logger.info("=" * 50)
    logger.info(f"Portfolio: http://localhost:{port}")
    with app.app_context():
        logger.info(f"Database: {db.engine.url.render_as_string(hide_password=True)}")
    logger.info("=" * 50)

    try:
        app.run(host='0.0.0.0', port=port, debug=False, use_reloader=False)
    except KeyboardInterrupt:
        logger.info("Stopping server...")
    finally:
        with app.app_context():
            db.engine.dispose()
        logger.info("Database connections closed")

if __name__ == '__main__':
    main()
