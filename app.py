from design_tracker import create_app

app = create_app()

if __name__ == '__main__':
    with app.app_context():
        from design_tracker.services.store import init_schema
        init_schema()
    app.run(debug=app.config.get('DEBUG', False))
