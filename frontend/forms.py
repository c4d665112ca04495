# -*- coding: utf-8 -*-
"""
Formulários Flask-WTF das telas de cadastro.

Os campos de seleção (filial, professor, aluno) recebem as opções na
view, a partir da API.
"""
from flask_wtf import FlaskForm
from wtforms import (StringField, PasswordField, SelectField, SelectMultipleField, BooleanField,
                     DateField, DecimalField, IntegerField, TextAreaField)
from wtforms.validators import DataRequired, Email, Length, Regexp, NumberRange, Optional

from escola_futebol.constantes import CATEGORIAS_TURMA, DIAS_SEMANA, FORMAS_PAGAMENTO

CPF_RE = r'^\d{3}\.?\d{3}\.?\d{3}-?\d{2}$'
MES_REFERENCIA_RE = r'^\d{4}-(0[1-9]|1[0-2])$'

OBRIGATORIO = "Campo obrigatório"
EMAIL_INVALIDO = "Email inválido"


class LoginForm(FlaskForm):
    email = StringField('Email', validators=[DataRequired(message=OBRIGATORIO)])
    senha = PasswordField('Senha', validators=[DataRequired(message=OBRIGATORIO)])


class ConfirmarExclusaoForm(FlaskForm):
    """Só carrega o token CSRF da confirmação."""


class AlunoForm(FlaskForm):
    nome = StringField('Nome', validators=[
        DataRequired(message="Nome é obrigatório"),
        Length(max=255, message="Nome deve ter no máximo 255 caracteres"),
    ])
    cpf = StringField('CPF', validators=[Optional(), Regexp(CPF_RE, message="CPF deve ter 11 dígitos")])
    rg = StringField('RG', validators=[Optional(), Length(max=20)])
    email = StringField('Email', validators=[Optional(), Email(message=EMAIL_INVALIDO)])
    telefone = StringField('Telefone', validators=[Optional(), Length(max=20)])
    data_nascimento = DateField('Data de nascimento', validators=[Optional()])
    data_matricula = DateField('Data de matrícula', validators=[Optional()])
    endereco = StringField('Endereço', validators=[Optional()])
    bairro = StringField('Bairro', validators=[Optional(), Length(max=100)])
    cep = StringField('CEP', validators=[Optional(), Regexp(r'^\d{5}-?\d{3}$', message="CEP inválido")])
    cidade = StringField('Cidade', validators=[Optional(), Length(max=100)])
    estado = StringField('UF', validators=[Optional(), Length(min=2, max=2, message="Use a sigla do estado")])
    nome_responsavel = StringField('Responsável', validators=[Optional(), Length(max=255)])
    telefone_responsavel = StringField('Telefone do responsável', validators=[Optional(), Length(max=20)])
    email_responsavel = StringField('Email do responsável', validators=[Optional(), Email(message=EMAIL_INVALIDO)])
    filial_id = SelectField('Filial', choices=[], validate_choice=False)
    ativo = BooleanField('Ativo', default=True)


class ProfessorForm(FlaskForm):
    nome = StringField('Nome', validators=[DataRequired(message="Nome é obrigatório"), Length(max=255)])
    email = StringField('Email', validators=[Optional(), Email(message=EMAIL_INVALIDO)])
    telefone = StringField('Telefone', validators=[Optional(), Length(max=20)])
    especialidade = StringField('Especialidade', validators=[Optional(), Length(max=100)])
    salario = DecimalField('Salário', places=2, validators=[Optional(), NumberRange(min=0, message="Salário não pode ser negativo")])
    filial_id = SelectField('Filial', choices=[], validate_choice=False)
    ativo = BooleanField('Ativo', default=True)


class TurmaForm(FlaskForm):
    nome = StringField('Nome', validators=[DataRequired(message="Nome é obrigatório"), Length(max=255)])
    categoria = SelectField('Categoria', choices=[(c, c) for c in CATEGORIAS_TURMA],
                            validators=[DataRequired(message="Selecione a categoria")])
    horario = StringField('Horário', validators=[Optional(), Length(max=100)])
    dias_semana = SelectMultipleField('Dias da semana', choices=[(d, d) for d in DIAS_SEMANA])
    capacidade_maxima = IntegerField('Capacidade máxima', default=20, validators=[
        DataRequired(message="Informe a capacidade"),
        NumberRange(min=1, message="Capacidade deve ser maior que zero"),
    ])
    valor_mensalidade = DecimalField('Mensalidade', places=2, validators=[Optional(), NumberRange(min=0)])
    professor_id = SelectField('Professor', choices=[], validate_choice=False)
    filial_id = SelectField('Filial', choices=[], validate_choice=False)
    ativo = BooleanField('Ativa', default=True)


class FilialForm(FlaskForm):
    nome = StringField('Nome', validators=[DataRequired(message="Nome é obrigatório"), Length(max=100)])
    endereco = StringField('Endereço', validators=[DataRequired(message="Endereço é obrigatório")])
    cidade = StringField('Cidade', validators=[Optional(), Length(max=100)])
    telefone = StringField('Telefone', validators=[Optional(), Length(max=20)])
    email = StringField('Email', validators=[Optional(), Email(message=EMAIL_INVALIDO)])
    responsavel = StringField('Responsável', validators=[Optional(), Length(max=100)])
    login_portal = StringField('Login do portal', validators=[Optional(), Length(max=100)])
    senha_portal = PasswordField('Senha do portal', validators=[
        Optional(), Length(min=6, message="A senha deve ter pelo menos 6 caracteres"),
    ])


class PagamentoForm(FlaskForm):
    aluno_id = SelectField('Aluno', choices=[], validators=[DataRequired(message="Selecione o aluno")])
    valor = DecimalField('Valor', places=2, validators=[
        DataRequired(message="Informe o valor"),
        NumberRange(min=0.01, message="O valor deve ser maior que zero"),
    ])
    mes_referencia = StringField('Mês de referência', validators=[
        DataRequired(message=OBRIGATORIO),
        Regexp(MES_REFERENCIA_RE, message="Use o formato AAAA-MM"),
    ])
    data_pagamento = DateField('Data do pagamento', validators=[DataRequired(message="Informe a data do pagamento")])
    forma_pagamento = SelectField('Forma de pagamento', choices=[(f, f) for f in FORMAS_PAGAMENTO],
                                  validators=[DataRequired(message="Selecione a forma de pagamento")])
    observacoes = TextAreaField('Observações', validators=[Optional()])


class ChamadaForm(FlaskForm):
    data_aula = DateField('Data da aula', validators=[DataRequired(message="Informe a data da aula")])
