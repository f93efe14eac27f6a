# Configuration file for the Campus Life newsletter compiler
# Values are read from the environment (a local .env file is honoured)

import os
from dotenv import load_dotenv

load_dotenv()

# Remote Campus Life API
API_SETTINGS = {
    'base_url': os.getenv('CAMPUS_LIFE_API_URL', 'http://localhost:8080'),
    'token': os.getenv('CAMPUS_LIFE_API_TOKEN'),
    'session_cookie': os.getenv('CAMPUS_LIFE_SESSION_COOKIE'),
    'timeout': int(os.getenv('CAMPUS_LIFE_API_TIMEOUT', '15')),
    'max_retries': 2,
    'events_path': '/api/v1/events',
    'organizers_path': '/api/v1/organizers',
    # Preview mailing is deployment specific; point it at the server's endpoint
    'preview_path': os.getenv('CAMPUS_LIFE_PREVIEW_PATH', '/api/v1/events/newsletter-preview'),
}

# --- Newsletter content ---
NEWSLETTER_SETTINGS = {
    'name': os.getenv('NEWSLETTER_NAME', 'Campus Life Newsletter'),
    'display_timezone': os.getenv('DISPLAY_TIMEZONE', 'Europe/Berlin'),
    'output_dir': os.getenv('NEWSLETTER_OUTPUT_DIR', 'output'),
    'filename_prefix': 'campus-life-newsletter',
    'header_image_url': 'https://nbg1.your-objectstorage.com/neuland/uploads/cl-tool/cl-header.webp',
    'brand_color': '#215b9c',
    'footer_title': 'Campus Life Events',
    'footer_tagline': 'Der Newsletter für studentische Veranstaltungen',
    'contact_email': 'campus-life@thi.de',
    'contact_label': 'Campus Life (Studierendenvertretung)',
    'unsubscribe_url': 'https://sympa.thi.de/',
    'mailing_list': 'students-campuslife',
    'debounce_seconds': 0.3,
}

# Email settings for SMTP preview delivery
EMAIL_SETTINGS = {
    'smtp_server': os.getenv('SMTP_SERVER'),
    'smtp_port': int(os.getenv('SMTP_PORT', '587')),
    'smtp_username': os.getenv('SMTP_USERNAME'),
    'smtp_password': os.getenv('SMTP_PASSWORD'),
    'sender_email': os.getenv('SMTP_EMAIL'),
    'sender_name': os.getenv('SMTP_FROM_NAME', 'Campus Life Events'),
    'preview_recipient': os.getenv('PREVIEW_RECIPIENT'),
}

# --- System Settings ---
SYSTEM_SETTINGS = {
    'log_level': os.getenv('LOG_LEVEL', 'INFO'),
    'log_dir': os.getenv('LOG_DIR', 'logs'),
    'log_max_bytes': 10 * 1024 * 1024,
    'log_backup_count': 5,
}
