from lending.extensions import db

# Roles the reports know about; the column itself accepts any role name.
STUDENT = "Student"
FACULTY = "Faculty"
STAFF = "Staff"
LENDING_ROLES = (STUDENT, FACULTY, STAFF)


class Member(db.Model):
    __tablename__ = "members"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(100), unique=True, nullable=False, index=True)
    phone = db.Column(db.String(15), nullable=True)
    role = db.Column(db.String(50), nullable=False, index=True)
