import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# OCR engines
OCR_ENGINE = os.getenv('OCR_ENGINE', 'auto')  # auto | tesseract | paddle | ocrspace
OCR_LANG = os.getenv('OCR_LANG', 'eng')

# OCR.space remote API
OCR_SPACE_ENDPOINT = os.getenv('OCR_SPACE_ENDPOINT', 'https://api.ocr.space/parse/image')
OCR_SPACE_API_KEY = os.getenv('OCR_SPACE_API_KEY')
OCR_TIMEOUT = float(os.getenv('OCR_TIMEOUT', '30'))  # seconds
OCR_MAX_RETRIES = int(os.getenv('OCR_MAX_RETRIES', '3'))

# Uploads
MAX_UPLOAD_MB = int(os.getenv('MAX_UPLOAD_MB', '10'))
MAX_OCR_TEXT_LENGTH = 10000

# Server
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
PORT = int(os.getenv('PORT', '5001'))
USER_AGENT = 'badgescan/1.0'
