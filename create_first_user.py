import os
import logging

from sqlalchemy.exc import SQLAlchemyError

from escola_futebol.database import SessionLocal
from escola_futebol.auth import get_password_hash
from escola_futebol.models.usuario import Usuario

# Importação dos outros modelos para garantir que o SQLAlchemy registre tudo
from escola_futebol.models.filial import Filial
from escola_futebol.models.aluno import Aluno
from escola_futebol.models.professor import Professor
from escola_futebol.models.turma import Turma
from escola_futebol.models.matricula import Matricula
from escola_futebol.models.pagamento import Pagamento
from escola_futebol.models.presenca import Presenca
from escola_futebol.models.gestor_unidade import GestorUnidade


def create_first_user():
    """
    Cria o administrador inicial a partir de ADMIN_EMAIL e ADMIN_PASSWORD.
    Sem essas variáveis nada é feito.
    """
    email = os.getenv("ADMIN_EMAIL")
    senha = os.getenv("ADMIN_PASSWORD")
    if not email or not senha:
        logging.info("ADMIN_EMAIL/ADMIN_PASSWORD não definidos; administrador inicial não criado.")
        return None

    db = SessionLocal()
    try:
        user = db.query(Usuario).filter(Usuario.email == email).first()
        if user:
            logging.info(f"Usuário administrador '{email}' já existe.")
            return user

        logging.info("Criando primeiro usuário administrador...")
        db_user = Usuario(
            username=os.getenv("ADMIN_USERNAME", "admin"),
            email=email,
            nome="Administrador",
            hashed_password=get_password_hash(senha),
            role="administrador"
        )
        db.add(db_user)
        db.commit()
        db.refresh(db_user)
        logging.info(f"Usuário administrador '{email}' criado com sucesso!")
        return db_user

    except SQLAlchemyError as e:
        logging.error(f"Erro ao criar usuário: {e}")
        db.rollback()
        return None
    finally:
        db.close()


if __name__ == "__main__":
    from dotenv import load_dotenv

    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    load_dotenv()
    create_first_user()
