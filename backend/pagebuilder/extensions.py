from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate

# Records handed back by the repositories stay readable after commit
db = SQLAlchemy(session_options={"expire_on_commit": False})
migrate = Migrate()
