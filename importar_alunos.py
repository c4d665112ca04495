import argparse
import logging

import pandas as pd
from dotenv import load_dotenv
from pydantic import EmailStr, TypeAdapter, ValidationError
from sqlalchemy.orm import Session

from escola_futebol.database import SessionLocal
from escola_futebol.schemas.validadores import normalizar_cpf

# Importar todos os modelos para resolver relacionamentos
from escola_futebol.models.aluno import Aluno
from escola_futebol.models.filial import Filial
from escola_futebol.models.professor import Professor
from escola_futebol.models.turma import Turma
from escola_futebol.models.matricula import Matricula
from escola_futebol.models.pagamento import Pagamento
from escola_futebol.models.presenca import Presenca
from escola_futebol.models.gestor_unidade import GestorUnidade

# --- CONFIGURAÇÕES ---
EXCEL_FILE_PATH = "importacao_alunos.xlsx"
# coluna da planilha -> campo do aluno
COLUNAS = {
    "NOME": "nome",
    "CPF": "cpf",
    "NASCIMENTO": "data_nascimento",
    "TELEFONE": "telefone",
    "EMAIL": "email",
    "RESPONSAVEL": "nome_responsavel",
    "TELEFONE_RESPONSAVEL": "telefone_responsavel",
}
# ---------------------

email_adapter = TypeAdapter(EmailStr)


def _valor(linha, coluna):
    valor = linha.get(coluna)
    if valor is None or pd.isna(valor):
        return None
    return valor


def importar_alunos(db: Session, df: pd.DataFrame, filial_id: int = None) -> dict:
    """
    Cadastra os alunos da planilha que ainda não existem (mesmo nome na mesma filial).
    """
    if "NOME" not in df.columns:
        raise ValueError(f"A coluna 'NOME' não foi encontrada. Colunas: {list(df.columns)}")

    novos = 0
    existentes = 0
    ignorados = 0
    # Nomes já cadastrados nesta execução; a sessão não faz autoflush
    vistos = set()

    for _, linha in df.iterrows():
        nome = _valor(linha, "NOME")
        if not nome:
            ignorados += 1
            continue
        nome = str(nome).strip()

        if nome in vistos or db.query(Aluno).filter(Aluno.nome == nome, Aluno.filial_id == filial_id).first():
            existentes += 1
            continue

        dados = {"nome": nome, "filial_id": filial_id}
        for coluna, campo in COLUNAS.items():
            if coluna == "NOME" or coluna not in df.columns:
                continue
            valor = _valor(linha, coluna)
            if valor is None:
                continue
            if campo == "data_nascimento":
                valor = pd.to_datetime(valor, dayfirst=True).date()
            elif campo == "cpf":
                try:
                    valor = normalizar_cpf(str(valor))
                except ValueError:
                    logging.warning(f"CPF inválido ignorado para {nome}: {valor}")
                    continue
            elif campo == "email":
                try:
                    valor = email_adapter.validate_python(str(valor).strip())
                except ValidationError:
                    logging.warning(f"Email inválido ignorado para {nome}: {valor}")
                    continue
            else:
                valor = str(valor).strip()
            dados[campo] = valor

        db.add(Aluno(**dados))
        vistos.add(nome)
        novos += 1
        logging.info(f"  + Adicionando: {nome}")

    if novos:
        db.commit()

    return {"novos": novos, "existentes": existentes, "ignorados": ignorados}


def main(argv=None):
    parser = argparse.ArgumentParser(description='Importa alunos de uma planilha Excel')
    parser.add_argument('arquivo', nargs='?', default=EXCEL_FILE_PATH, help='Caminho do .xlsx')
    parser.add_argument('--filial', type=int, help='ID da filial dos alunos importados')
    args = parser.parse_args(argv)

    load_dotenv()
    logging.info("Iniciando a importação de alunos do Excel...")

    try:
        df = pd.read_excel(args.arquivo)
    except FileNotFoundError:
        logging.error(f"O arquivo '{args.arquivo}' não foi encontrado.")
        return None

    db = SessionLocal()
    try:
        if args.filial and not db.query(Filial).filter(Filial.id == args.filial).first():
            logging.error(f"Filial {args.filial} não encontrada.")
            return None
        resumo = importar_alunos(db, df, args.filial)
        logging.info(
            f"Importação concluída: {resumo['novos']} novos, {resumo['existentes']} já existiam, "
            f"{resumo['ignorados']} linhas sem nome."
        )
        return resumo
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    main()
