import os


def _split_origins(value):
    value = (value or '*').strip()
    if value == '*':
        return '*'
    return [origin.strip() for origin in value.split(',') if origin.strip()]


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', '3000'))
    # '*' or a comma separated list of origins, applied to HTTP and Socket.IO
    CORS_ORIGINS = _split_origins(os.environ.get('CORS_ORIGINS'))
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/')
    # Collectibles seeded when the world is created
    INITIAL_COLLECTIBLES = int(os.environ.get('INITIAL_COLLECTIBLES', '1'))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()
    # Value advertised in X-Powered-By
    POWERED_BY = os.environ.get('POWERED_BY', 'PHP 7.4.3')
