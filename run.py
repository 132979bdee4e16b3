import os
import click
from dotenv import load_dotenv

# Load environment variables before the config class is evaluated
load_dotenv()

from marketplace import create_app, db  # noqa: E402
from marketplace.services.auth_service import AuthService  # noqa: E402

# Create app instance
app = create_app()


@app.cli.command("init-db")
def init_db():
    """Initialize database"""
    db.create_all()
    click.echo('Database initialized successfully!')


@app.cli.command("drop-db")
def drop_db():
    """Drop all tables"""
    if click.confirm('Are you sure you want to drop all tables?'):
        db.drop_all()
        click.echo('Database dropped successfully!')
    else:
        click.echo('Operation cancelled')


@app.cli.command("create-admin")
@click.option('--email', prompt='Admin email')
@click.password_option('--password', prompt='Admin password')
def create_admin(email, password):
    """Create a verified admin user"""
    try:
        AuthService.create_admin(email, password)
    except ValueError as e:
        click.echo(str(e))
        return

    click.echo('Admin user created successfully!')


if __name__ == '__main__':
    app.run(
        host=os.getenv('HOST', '0.0.0.0'),
        port=int(os.getenv('PORT', 5000)),
        debug=os.getenv('DEBUG', 'False') == 'True'
    )
