"""Application settings, selected by name in create_app()."""
import os


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev_key_please_change')

    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL', 'sqlite:///design_tracker.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Seed admin created by init-db
    ADMIN_USERNAME = os.environ.get('ADMIN_USERNAME', 'admin')
    ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD', '12345')
    ADMIN_NAME = os.environ.get('ADMIN_NAME', 'Super Admin')

    # Uploads are checked against a 15 MiB ceiling in the services; the body
    # limit leaves room for multipart overhead so that check gets to run.
    MAX_CONTENT_LENGTH = 20 * 1024 * 1024

    BABEL_DEFAULT_LOCALE = 'en'
    LANGUAGES = ['en', 'id']

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')


class DevelopmentConfig(Config):
    DEBUG = True
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    ADMIN_PASSWORD = 'admin-test-pass'
    LOG_LEVEL = 'WARNING'


class ProductionConfig(Config):
    DEBUG = False


config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig,
}
