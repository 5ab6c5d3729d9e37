import json
import os
from pathlib import Path
from pymongo import MongoClient
from dotenv import load_dotenv

# Load environment variables from the project .env file
load_dotenv(os.path.join(os.path.dirname(__file__), '..', '..', '.env'))

# Get MongoDB configuration from environment variables
MONGO_CONFIG = os.getenv('DB_URL')
DB_NAME = os.getenv('DB_NAME', 'qbank')
if not MONGO_CONFIG:
    # Fallback to local config file
    root_dir = Path(__file__).resolve().parent.parent.parent
    config_path = os.path.join(root_dir, 'local_config.json')
    try:
        with open(config_path, 'r') as config_file:
            config_data = json.load(config_file)
        MONGO_CONFIG = config_data['MONGO_CONFIG']['url']
        DB_NAME = config_data['MONGO_CONFIG'].get('db_name', DB_NAME)
    except FileNotFoundError:
        raise Exception("Neither DB_URL environment variable nor local_config.json found")

# MongoDB connection configuration
MONGO_CLIENT_CONFIG = {
    'maxPoolSize': 50,
    'minPoolSize': 5,
    'connectTimeoutMS': 10000,
    'serverSelectionTimeoutMS': 10000,
    'socketTimeoutMS': 60000,
    'retryWrites': True,
    'retryReads': True,
}

def get_mongo_client():
    """Get a MongoDB client with connection pooling."""
    return MongoClient(MONGO_CONFIG, **MONGO_CLIENT_CONFIG)


# Single client for the main process; pymongo connects lazily on first use
client = get_mongo_client()
db = client[DB_NAME]

def get_collection(name):
    """Get collection from database by its logical name."""
    from qbank.Exam.Tag_Analytics.config.settings import COLLECTIONS
    return db[COLLECTIONS.get(name, name)]
