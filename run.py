from app import app, db
from data_seeder import seed_questions

if __name__ == '__main__':
    with app.app_context():
        db.create_all()

        # Create sample questions if database is empty
        seed_questions()

    app.run(debug=app.config.get('DEBUG', False), host='0.0.0.0', port=5000)
