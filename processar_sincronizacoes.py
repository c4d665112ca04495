import os
import logging
import argparse
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from dotenv import load_dotenv

# --- Importações de todos os modelos ---
from escola_futebol.models.usuario import Usuario
from escola_futebol.models.filial import Filial
from escola_futebol.models.aluno import Aluno
from escola_futebol.models.professor import Professor
from escola_futebol.models.turma import Turma
from escola_futebol.models.matricula import Matricula
from escola_futebol.models.pagamento import Pagamento
from escola_futebol.models.presenca import Presenca
from escola_futebol.models.gestor_unidade import GestorUnidade
from escola_futebol.models.sincronizacao import Sincronizacao
# ------------------------------------------------------
from escola_futebol import sync

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')


def processar_sincronizacoes(argv=None):
    """
    Drena a fila de sincronização das unidades. Feito para rodar no cron,
    por exemplo a cada 5 minutos.
    """
    parser = argparse.ArgumentParser(description='Processa a fila de sincronização das unidades')
    parser.add_argument('--lote', type=int, default=sync.TAMANHO_LOTE, help='Operações por lote')
    parser.add_argument('--max-lotes', type=int, default=10, help='Limite de lotes nesta execução')
    args = parser.parse_args(argv)

    load_dotenv()
    DATABASE_URL = os.getenv("DATABASE_URL")

    if not DATABASE_URL:
        logging.error("DATABASE_URL não encontrada nas variáveis de ambiente.")
        return None

    if DATABASE_URL.startswith("postgres://"):
        DATABASE_URL = DATABASE_URL.replace("postgres://", "postgresql://", 1)

    engine = create_engine(DATABASE_URL, pool_pre_ping=True)
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = SessionLocal()

    total = {"processadas": 0, "falhas": 0}
    try:
        for _ in range(args.max_lotes):
            resultado = sync.processar_lote(db, limite=args.lote)
            total["processadas"] += resultado["processadas"]
            total["falhas"] += resultado["falhas"]
            # Lote incompleto: a fila acabou (as falhas continuam pendentes para a próxima execução)
            if resultado["processadas"] + resultado["falhas"] < args.lote or resultado["processadas"] == 0:
                break

        situacao = sync.status(db)
        logging.info(
            f"Sincronização concluída: {total['processadas']} processadas, {total['falhas']} falhas. "
            f"Pendentes: {situacao['pendentes']}, com erro: {situacao['erros']}"
        )
        return total
    finally:
        db.close()


if __name__ == "__main__":
    processar_sincronizacoes()
