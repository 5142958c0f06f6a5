#!/usr/bin/env python3
"""
Render startup script
Ensures proper initialization before starting the web server
"""

import sys
import logging
from deploy_config import setup_deployment_environment, get_port

# Setup deployment environment first
setup_deployment_environment()

# Import after environment setup
from web_interface import app, initialize_agents, site_config

logger = logging.getLogger(__name__)

def initialize_for_render():
    """Initialize application for Render deployment"""
    try:
        agent = initialize_agents()
        logger.info(f"Mirroring {agent.base_url} (cache TTL {site_config['cache_ttl']}s)")
        logger.info("✅ Render initialization complete")
        return True

    except Exception as e:
        logger.error(f"❌ Render initialization failed: {e}")
        return False

if __name__ == '__main__':
    if not initialize_for_render():
        sys.exit(1)

    port = get_port()
    logger.info(f"Starting application on port {port}")
    app.run(host='0.0.0.0', port=port, debug=False)
