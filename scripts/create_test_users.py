"""
Script para crear usuarios de prueba
Ejecutar desde la raíz del proyecto: python -m scripts.create_test_users
"""
from app.config.database import Base, SessionLocal, engine
from app.core.auth.repository import UserRepository
from app.core.auth.service import AuthService
from app.core.exceptions import UserExistsError
from app.shared.database.models import ROLE_EMPLOYEE, ROLE_MODERATOR

TEST_USERS = [
    {
        "email": "moderator@pvz.ru",
        "password": "moderator123",
        "role": ROLE_MODERATOR
    },
    {
        "email": "employee@pvz.ru",
        "password": "employee123",
        "role": ROLE_EMPLOYEE
    }
]


def create_test_users():
    """Crear un moderador y un empleado de prueba"""
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()

    try:
        service = AuthService(UserRepository(db))

        for user_data in TEST_USERS:
            try:
                user = service.register(**user_data)
                print(f"✅ Usuario creado: {user.email} ({user.role})")
            except UserExistsError:
                print(f"✅ Ya existe: {user_data['email']}")

        print("\n🔑 Credenciales de prueba:")
        for user_data in TEST_USERS:
            print(f"   {user_data['role']}: {user_data['email']} / {user_data['password']}")
    finally:
        db.close()


if __name__ == "__main__":
    create_test_users()
