"""
Listas fixas usadas nos formulários e validações.
"""

CATEGORIAS_TURMA = [
    "Baby fut",
    "Sub 07/08",
    "Sub 09/10",
    "Sub 11/12",
    "Sub 13/14",
    "Sub 15 á 17",
]

DIAS_SEMANA = [
    "Segunda",
    "Terça",
    "Quarta",
    "Quinta",
    "Sexta",
    "Sábado",
    "Domingo",
]

FORMAS_PAGAMENTO = ["PIX", "Dinheiro", "Cartão", "Transferência"]

CATEGORIAS_DOCUMENTO = ["comunicado", "contrato", "regulamento", "financeiro", "outro"]

VISIBILIDADES_DOCUMENTO = ["todos", "filial", "aluno"]

PAPEIS_USUARIO = ["administrador", "atendente", "pendente"]

# Faixas etárias do relatório geral: (rótulo, idade mínima, idade máxima)
FAIXAS_ETARIAS = [
    ("5-10", 5, 10),
    ("11-15", 11, 15),
    ("16-20", 16, 20),
    ("21+", 21, None),
]
