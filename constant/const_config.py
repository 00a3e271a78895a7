"""
constant defaults for the application
"""
import os
from pathlib import Path

# other constants can be added here as needed
# get the parent folder of the project

PARENT_DIR = Path(__file__).parents[1]
LOG_FOLDER = os.path.join(PARENT_DIR, 'Logs')
LOG_FILE = os.path.join(LOG_FOLDER, 'app.log')
ENV_FILE = os.path.join(PARENT_DIR, '.env')

SERVER_NAME = 'playwright-test-tools'
DEFAULT_TEST_ID_ATTRIBUTE = 'data-testid'
ENV_PREFIX = 'PW_TOOLS_'
