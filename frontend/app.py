# -*- coding: utf-8 -*-
"""
Front-end Flask do sistema de gestão da escola de futebol.

As páginas buscam os dados na API FastAPI (``frontend.utils.api_request``),
filtram a lista na própria página e, depois de cada alteração, voltam para
a lista, que é buscada de novo.
"""
import logging
from datetime import date
from decimal import Decimal
from functools import wraps

from flask import Blueprint, Flask, Response, flash, redirect, render_template, request, session, url_for
from flask_wtf.csrf import CSRFProtect

from frontend.config import Config
from frontend.forms import (AlunoForm, ChamadaForm, ConfirmarExclusaoForm, FilialForm, LoginForm,
                            PagamentoForm, ProfessorForm, TurmaForm)
from frontend.utils import (api_request, filtrar_registros, formatar_moeda, mensagem_erro, para_data,
                            valor_campo)
from escola_futebol.constantes import CATEGORIAS_TURMA, FORMAS_PAGAMENTO

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

bp = Blueprint("escola", __name__)
csrf = CSRFProtect()

OPCOES_ATIVO = [("true", "Ativos"), ("false", "Inativos")]
OPCOES_PERIODO = [
    ("current-month", "Mês Atual"),
    ("last-month", "Mês Passado"),
    ("last-3-months", "Últimos 3 Meses"),
    ("last-6-months", "Últimos 6 Meses"),
]


def login_required(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if 'access_token' not in session:
            return redirect(url_for('escola.login', next=request.path))
        return f(*args, **kwargs)
    return decorated_function


# --- Funções auxiliares ---

def _carregar(endpoint, descricao, params=None, padrao=None):
    """
    GET na API. Em caso de falha mostra a mensagem padrão e devolve ``padrao``.
    """
    padrao = [] if padrao is None else padrao
    response = api_request(endpoint, params=params)
    if response is not None and response.status_code == 200:
        return response.json()
    flash(mensagem_erro(f"carregar {descricao}"), "error")
    return padrao


def _opcoes(endpoint, rotulo_vazio, descricao):
    registros = _carregar(endpoint, descricao)
    return [("", rotulo_vazio)] + [(str(r["id"]), r["nome"]) for r in registros]


def _dados_do_formulario(form):
    dados = {}
    for field in form:
        if field.name == "csrf_token":
            continue
        valor = field.data
        if isinstance(valor, date):
            valor = valor.isoformat()
        elif isinstance(valor, Decimal):
            valor = float(valor)
        elif isinstance(valor, str):
            valor = valor.strip() or None
        if field.name.endswith("_id"):
            valor = int(valor) if valor else None
        dados[field.name] = valor
    return dados


def _para_formulario(registro, campos_data=()):
    dados = dict(registro)
    for campo in campos_data:
        dados[campo] = para_data(dados.get(campo))
    for chave, valor in registro.items():
        if chave.endswith("_id") and valor is not None:
            dados[chave] = str(valor)
    return dados


def _aplicar_erros_api(form, response):
    """Mostra ao lado de cada campo os erros de validação devolvidos pela API."""
    try:
        erros = response.json().get("erros", [])
    except ValueError:
        return False
    aplicou = False
    for erro in erros:
        campo = erro.get("campo")
        if campo and campo in form:
            form[campo].errors = list(form[campo].errors) + [erro.get("mensagem")]
            aplicou = True
    return aplicou


def _salvar(form, endpoint, registro_id, descricao, sucesso):
    """
    Envia o formulário para a API. Devolve "ok", "invalido" (erros por
    campo vindos da API) ou "erro".
    """
    dados = _dados_do_formulario(form)
    if registro_id:
        response = api_request(f"{endpoint}/{registro_id}", method="PUT", json=dados)
        esperado = 200
    else:
        response = api_request(endpoint, method="POST", json=dados)
        esperado = 201

    if response is not None and response.status_code == esperado:
        flash(sucesso, "success")
        return "ok"

    flash(mensagem_erro(f"salvar {descricao}"), "error")
    logger.error(f"Erro ao salvar {descricao}: {response.text if response is not None else 'Sem resposta'}")
    if response is not None and response.status_code == 422 and _aplicar_erros_api(form, response):
        return "invalido"
    return "erro"


def _formulario(form_cls, endpoint, registro_id, descricao, lista, sucesso, titulo,
                preparar=None, campos_data=()):
    if registro_id and request.method == "GET":
        response = api_request(f"{endpoint}/{registro_id}")
        if response is None or response.status_code != 200:
            flash(mensagem_erro(f"carregar {descricao}"), "error")
            return redirect(url_for(lista))
        form = form_cls(data=_para_formulario(response.json(), campos_data))
    else:
        form = form_cls()

    if preparar:
        preparar(form)

    if form.validate_on_submit():
        resultado = _salvar(form, endpoint, registro_id, descricao, sucesso)
        if resultado != "invalido":
            return redirect(url_for(lista))

    return render_template("formulario.html", form=form, titulo=titulo, voltar=url_for(lista))


def _confirmar_exclusao(endpoint, registro_id, descricao, lista, sucesso):
    """
    GET mostra a confirmação; só o POST confirmado chama o DELETE.
    """
    form = ConfirmarExclusaoForm()
    if form.validate_on_submit():
        response = api_request(f"{endpoint}/{registro_id}", method="DELETE")
        if response is not None and response.status_code == 204:
            flash(sucesso, "success")
            logger.info(f"{descricao.capitalize()} {registro_id} excluído")
        else:
            flash(mensagem_erro(f"excluir {descricao}"), "error")
            logger.error(f"Erro ao excluir {descricao} {registro_id}: {response.text if response is not None else 'Sem resposta'}")
        return redirect(url_for(lista))

    registro = _carregar(f"{endpoint}/{registro_id}", descricao, padrao={})
    return render_template(
        "confirmar_exclusao.html",
        form=form,
        descricao=descricao,
        nome=registro.get("nome") or registro.get("titulo") or f"#{registro_id}",
        voltar=url_for(lista),
    )


def _csv_da_api(endpoint, params, nome_padrao, voltar):
    response = api_request(endpoint, params=params)
    if response is None or response.status_code != 200:
        flash(mensagem_erro("exportar o relatório"), "error")
        return redirect(voltar)
    disposicao = response.headers.get("Content-Disposition", f'attachment; filename="{nome_padrao}"')
    return Response(
        response.content,
        mimetype="text/csv",
        headers={"Content-Disposition": disposicao},
    )


def _args(*nomes):
    return {nome: request.args.get(nome, "") for nome in nomes}


# --- Autenticação ---

@bp.route("/login", methods=["GET", "POST"])
def login():
    form = LoginForm()
    if form.validate_on_submit():
        response = api_request("/login", method="POST", json={"email": form.email.data, "senha": form.senha.data})
        if response is not None and response.status_code == 200:
            data = response.json()
            session['access_token'] = data['access_token']
            session['user_info'] = data['user_info']
            destino = request.args.get("next")
            if not destino or not destino.startswith("/") or destino.startswith("//"):
                destino = url_for("escola.index")
            return redirect(destino)
        if response is not None and response.status_code == 401:
            flash("Email ou senha inválidos.", "error")
        else:
            flash(mensagem_erro("entrar"), "error")
    return render_template("login.html", form=form)


@bp.route("/logout")
def logout():
    session.clear()
    flash("Você saiu do sistema.", "success")
    return redirect(url_for('escola.login'))


# --- Dashboard ---

@bp.route('/')
@login_required
def index():
    metrics = _carregar("/dashboard/metrics", "as métricas", padrao={})
    sync_status = _carregar("/sync/status", "o status da sincronização", padrao={})
    return render_template('dashboard.html', metrics=metrics, sync_status=sync_status)


# --- Alunos ---

@bp.route('/alunos')
@login_required
def alunos_list():
    filtros = _args("busca", "filial_id", "ativo")
    alunos = filtrar_registros(
        _carregar("/alunos", "alunos"),
        filtros["busca"],
        ("nome", "email", "cpf"),
        filial_id=filtros["filial_id"],
        ativo=filtros["ativo"],
    )
    return render_template(
        'lista.html',
        titulo="Alunos",
        registros=alunos,
        colunas=[
            ("nome", "Nome", None),
            ("telefone", "Telefone", None),
            ("filial.nome", "Filial", None),
            ("status_pagamento", "Pagamento", "status_pagamento"),
            ("ativo", "Ativo", "bool"),
        ],
        filtros=[
            ("filial_id", "Filial", _opcoes("/filiais", "Todas as filiais", "filiais")[1:]),
            ("ativo", "Situação", OPCOES_ATIVO),
        ],
        valores=filtros,
        novo_url=url_for("escola.alunos_novo"),
        ver_endpoint="escola.alunos_view",
        editar_endpoint="escola.alunos_editar",
        excluir_endpoint="escola.alunos_excluir",
    )


@bp.route('/alunos/<int:id>')
@login_required
def alunos_view(id):
    response = api_request(f'/alunos/{id}')
    if response is None or response.status_code != 200:
        flash(mensagem_erro("carregar aluno"), "error")
        return redirect(url_for("escola.alunos_list"))
    aluno = response.json()
    pagamentos = _carregar("/pagamentos", "pagamentos", params={"aluno_id": id})
    return render_template('aluno_detalhe.html', aluno=aluno, pagamentos=pagamentos)


def _preparar_aluno(form):
    form.filial_id.choices = _opcoes("/filiais", "Sem filial", "filiais")


@bp.route('/alunos/novo', methods=["GET", "POST"])
@login_required
def alunos_novo():
    return _formulario(AlunoForm, "/alunos", None, "aluno", "escola.alunos_list",
                       "Aluno cadastrado com sucesso!", "Novo aluno", _preparar_aluno)


@bp.route('/alunos/<int:id>/editar', methods=["GET", "POST"])
@login_required
def alunos_editar(id):
    return _formulario(AlunoForm, "/alunos", id, "aluno", "escola.alunos_list",
                       "Aluno atualizado com sucesso!", "Editar aluno", _preparar_aluno,
                       campos_data=("data_nascimento", "data_matricula"))


@bp.route("/alunos/<int:id>/excluir", methods=["GET", "POST"])
@login_required
def alunos_excluir(id):
    return _confirmar_exclusao("/alunos", id, "aluno", "escola.alunos_list", "Aluno excluído com sucesso!")


# --- Professores ---

@bp.route('/professores')
@login_required
def professores_list():
    filtros = _args("busca", "filial_id", "ativo")
    professores = filtrar_registros(
        _carregar("/professores", "professores"),
        filtros["busca"],
        ("nome", "email", "especialidade"),
        filial_id=filtros["filial_id"],
        ativo=filtros["ativo"],
    )
    return render_template(
        'lista.html',
        titulo="Professores",
        registros=professores,
        colunas=[
            ("nome", "Nome", None),
            ("email", "Email", None),
            ("especialidade", "Especialidade", None),
            ("filial.nome", "Filial", None),
            ("ativo", "Ativo", "bool"),
        ],
        filtros=[
            ("filial_id", "Filial", _opcoes("/filiais", "Todas as filiais", "filiais")[1:]),
            ("ativo", "Situação", OPCOES_ATIVO),
        ],
        valores=filtros,
        novo_url=url_for("escola.professores_novo"),
        editar_endpoint="escola.professores_editar",
        excluir_endpoint="escola.professores_excluir",
    )


def _preparar_professor(form):
    form.filial_id.choices = _opcoes("/filiais", "Sem filial", "filiais")


@bp.route("/professores/novo", methods=["GET", "POST"])
@login_required
def professores_novo():
    return _formulario(ProfessorForm, "/professores", None, "professor", "escola.professores_list",
                       "Professor cadastrado com sucesso!", "Novo professor", _preparar_professor)


@bp.route("/professores/<int:id>/editar", methods=["GET", "POST"])
@login_required
def professores_editar(id):
    return _formulario(ProfessorForm, "/professores", id, "professor", "escola.professores_list",
                       "Professor atualizado com sucesso!", "Editar professor", _preparar_professor)


@bp.route("/professores/<int:id>/excluir", methods=["GET", "POST"])
@login_required
def professores_excluir(id):
    return _confirmar_exclusao("/professores", id, "professor", "escola.professores_list",
                               "Professor excluído com sucesso!")


# --- Turmas ---

@bp.route("/turmas")
@login_required
def turmas_list():
    filtros = _args("busca", "categoria", "filial_id")
    turmas = filtrar_registros(
        _carregar("/turmas", "turmas"),
        filtros["busca"],
        ("nome", "professor.nome"),
        categoria=filtros["categoria"],
        filial_id=filtros["filial_id"],
    )
    return render_template(
        'lista.html',
        titulo="Turmas",
        registros=turmas,
        colunas=[
            ("nome", "Nome", None),
            ("categoria", "Categoria", None),
            ("horario", "Horário", None),
            ("dias_semana", "Dias", "lista"),
            ("professor.nome", "Professor", None),
            ("total_alunos", "Alunos", None),
            ("capacidade_maxima", "Vagas", None),
        ],
        filtros=[
            ("categoria", "Categoria", [(c, c) for c in CATEGORIAS_TURMA]),
            ("filial_id", "Filial", _opcoes("/filiais", "Todas as filiais", "filiais")[1:]),
        ],
        valores=filtros,
        novo_url=url_for("escola.turmas_novo"),
        chamada_endpoint="escola.turmas_chamada",
        editar_endpoint="escola.turmas_editar",
        excluir_endpoint="escola.turmas_excluir",
    )


def _preparar_turma(form):
    form.professor_id.choices = _opcoes("/professores", "Sem professor", "professores")
    form.filial_id.choices = _opcoes("/filiais", "Sem filial", "filiais")


@bp.route("/turmas/novo", methods=["GET", "POST"])
@login_required
def turmas_novo():
    return _formulario(TurmaForm, "/turmas", None, "turma", "escola.turmas_list",
                       "Turma cadastrada com sucesso!", "Nova turma", _preparar_turma)


@bp.route("/turmas/<int:id>/editar", methods=["GET", "POST"])
@login_required
def turmas_editar(id):
    return _formulario(TurmaForm, "/turmas", id, "turma", "escola.turmas_list",
                       "Turma atualizada com sucesso!", "Editar turma", _preparar_turma)


@bp.route("/turmas/<int:id>/excluir", methods=["GET", "POST"])
@login_required
def turmas_excluir(id):
    return _confirmar_exclusao("/turmas", id, "turma", "escola.turmas_list", "Turma excluída com sucesso!")


@bp.route("/turmas/<int:id>/chamada", methods=["GET", "POST"])
@login_required
def turmas_chamada(id):
    """
    Chamada da turma: lista os alunos com matrícula ativa e grava a
    presença de todos de uma vez.
    """
    form = ChamadaForm(data={"data_aula": para_data(request.args.get("data")) or date.today()})
    turma = _carregar(f"/turmas/{id}", "turma", padrao={})
    if not turma:
        return redirect(url_for("escola.turmas_list"))
    matriculas = _carregar("/matriculas", "matrículas", params={"turma_id": id, "ativo": "true"})

    if form.validate_on_submit():
        lote = {
            "turma_id": id,
            "data": form.data_aula.data.isoformat(),
            "presencas": [
                {
                    "aluno_id": m["aluno_id"],
                    "presente": request.form.get(f"presente_{m['aluno_id']}") == "on",
                    "observacoes": request.form.get(f"obs_{m['aluno_id']}") or None,
                }
                for m in matriculas
            ],
        }
        if not lote["presencas"]:
            flash("A turma não tem alunos matriculados.", "error")
            return redirect(url_for("escola.turmas_chamada", id=id))
        response = api_request("/presencas/lote", method="POST", json=lote)
        if response is not None and response.status_code == 201:
            flash("Chamada registrada com sucesso!", "success")
        else:
            flash(mensagem_erro("registrar a chamada"), "error")
        return redirect(url_for("escola.turmas_chamada", id=id, data=lote["data"]))

    dia = form.data_aula.data or date.today()
    existentes = _carregar("/presencas", "presenças", params={"turma_id": id, "data": dia.isoformat()})
    marcadas = {p["aluno_id"]: p for p in existentes}
    return render_template("chamada.html", form=form, turma=turma, matriculas=matriculas, marcadas=marcadas)


# --- Filiais ---

@bp.route("/filiais")
@login_required
def filiais_list():
    filtros = _args("busca")
    filiais = filtrar_registros(
        _carregar("/filiais/detalhadas", "filiais"),
        filtros["busca"],
        ("nome", "cidade", "responsavel"),
    )
    return render_template(
        'lista.html',
        titulo="Filiais",
        registros=filiais,
        colunas=[
            ("nome", "Nome", None),
            ("cidade", "Cidade", None),
            ("responsavel", "Responsável", None),
            ("total_alunos", "Alunos", None),
            ("total_turmas", "Turmas", None),
            ("receita_mensal", "Receita do mês", "moeda"),
        ],
        filtros=[],
        valores=filtros,
        novo_url=url_for("escola.filiais_novo"),
        editar_endpoint="escola.filiais_editar",
        excluir_endpoint="escola.filiais_excluir",
    )


@bp.route("/filiais/novo", methods=["GET", "POST"])
@login_required
def filiais_novo():
    return _formulario(FilialForm, "/filiais", None, "filial", "escola.filiais_list",
                       "Filial cadastrada com sucesso!", "Nova filial")


@bp.route("/filiais/<int:id>/editar", methods=["GET", "POST"])
@login_required
def filiais_editar(id):
    return _formulario(FilialForm, "/filiais", id, "filial", "escola.filiais_list",
                       "Filial atualizada com sucesso!", "Editar filial")


@bp.route("/filiais/<int:id>/excluir", methods=["GET", "POST"])
@login_required
def filiais_excluir(id):
    return _confirmar_exclusao("/filiais", id, "filial", "escola.filiais_list", "Filial excluída com sucesso!")


# --- Financeiro (pagamentos) ---

@bp.route("/financeiro")
@login_required
def financeiro_list():
    filtros = _args("busca", "mes_referencia", "forma_pagamento")
    pagamentos = filtrar_registros(
        _carregar("/pagamentos", "pagamentos"),
        filtros["busca"],
        ("aluno.nome", "observacoes"),
        mes_referencia=filtros["mes_referencia"],
        forma_pagamento=filtros["forma_pagamento"],
    )
    total = sum(float(p.get("valor") or 0) for p in pagamentos)
    return render_template(
        'lista.html',
        titulo="Financeiro",
        registros=pagamentos,
        resumo=f"Total filtrado: {formatar_moeda(total)}",
        colunas=[
            ("aluno.nome", "Aluno", None),
            ("mes_referencia", "Referência", None),
            ("data_pagamento", "Data", "data"),
            ("forma_pagamento", "Forma", None),
            ("valor", "Valor", "moeda"),
        ],
        filtros=[
            ("forma_pagamento", "Forma de pagamento", [(f, f) for f in FORMAS_PAGAMENTO]),
        ],
        filtro_mes=True,
        valores=filtros,
        novo_url=url_for("escola.pagamentos_novo"),
        editar_endpoint="escola.pagamentos_editar",
        excluir_endpoint="escola.pagamentos_excluir",
    )


def _preparar_pagamento(form):
    form.aluno_id.choices = _opcoes("/alunos", "Selecione o aluno", "alunos")


@bp.route("/financeiro/pagamentos/novo", methods=["GET", "POST"])
@login_required
def pagamentos_novo():
    return _formulario(PagamentoForm, "/pagamentos", None, "pagamento", "escola.financeiro_list",
                       "Pagamento registrado com sucesso!", "Novo pagamento", _preparar_pagamento)


@bp.route("/financeiro/pagamentos/<int:id>/editar", methods=["GET", "POST"])
@login_required
def pagamentos_editar(id):
    return _formulario(PagamentoForm, "/pagamentos", id, "pagamento", "escola.financeiro_list",
                       "Pagamento atualizado com sucesso!", "Editar pagamento", _preparar_pagamento,
                       campos_data=("data_pagamento",))


@bp.route("/financeiro/pagamentos/<int:id>/excluir", methods=["GET", "POST"])
@login_required
def pagamentos_excluir(id):
    return _confirmar_exclusao("/pagamentos", id, "pagamento", "escola.financeiro_list",
                               "Pagamento excluído com sucesso!")


# --- Relatórios ---

@bp.route("/relatorios")
@login_required
def relatorios():
    tipo = request.args.get("tipo", "geral")
    if tipo not in ("geral", "financeiro"):
        tipo = "geral"
    periodo = request.args.get("periodo", "current-month")
    relatorio = _carregar(f"/relatorios/{tipo}", "o relatório", params={"periodo": periodo}, padrao={})
    return render_template("relatorios.html", tipo=tipo, periodo=periodo, periodos=OPCOES_PERIODO,
                           relatorio=relatorio)


@bp.route("/relatorios/exportar")
@login_required
def relatorios_exportar():
    tipo = request.args.get("tipo", "geral")
    if tipo not in ("geral", "financeiro"):
        tipo = "geral"
    periodo = request.args.get("periodo", "current-month")
    return _csv_da_api(f"/relatorios/{tipo}.csv", {"periodo": periodo}, f"relatorio_{tipo}.csv",
                       url_for("escola.relatorios", tipo=tipo, periodo=periodo))


def _filtros_presenca():
    filtros = _args("busca", "turma_id", "status", "data_inicio", "data_fim")
    params = {k: v for k, v in filtros.items() if v and v not in ("todos", "todas")}
    return filtros, params


@bp.route("/relatorios/presencas")
@login_required
def relatorio_presencas():
    filtros, params = _filtros_presenca()
    dados = _carregar("/relatorios/presencas", "as presenças", params=params, padrao={})
    turmas = _carregar("/turmas", "turmas")
    return render_template(
        "presencas.html",
        estatisticas=dados.get("estatisticas", {}),
        presencas=dados.get("presencas", []),
        turmas=turmas,
        valores=filtros,
    )


@bp.route("/relatorios/presencas/exportar")
@login_required
def relatorio_presencas_exportar():
    filtros, params = _filtros_presenca()
    return _csv_da_api("/relatorios/presencas.csv", params, "relatorio_presencas.csv",
                       url_for("escola.relatorio_presencas", **params))


# --- Application factory ---

def create_app(config_class=Config):
    app = Flask(__name__, template_folder='templates')
    app.config.from_object(config_class)
    csrf.init_app(app)

    @app.template_filter('format_date_br')
    def format_date_br_filter(value):
        data = para_data(value)
        return data.strftime('%d/%m/%Y') if data else ""

    @app.template_filter('moeda')
    def moeda_filter(value):
        return formatar_moeda(value)

    @app.template_filter('campo')
    def campo_filter(registro, caminho):
        return valor_campo(registro, caminho)

    @app.template_filter('formatar')
    def formatar_filter(valor, formato=None):
        if formato == "moeda":
            return formatar_moeda(valor)
        if formato == "data":
            return format_date_br_filter(valor)
        if formato == "bool":
            return "Sim" if valor else "Não"
        if formato == "lista":
            return ", ".join(valor or [])
        if formato == "status_pagamento":
            if not valor or not valor.get("ultimo_pagamento"):
                return "Sem pagamentos"
            if valor.get("em_dia"):
                return "Em dia"
            return f"Atrasado ({valor.get('dias_atraso')} dias)"
        return "" if valor is None else valor

    app.register_blueprint(bp)
    return app


if __name__ == '__main__':
    create_app().run(debug=False, host='0.0.0.0', port=5700)
