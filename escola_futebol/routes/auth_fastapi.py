from fastapi import APIRouter, Depends, HTTPException, status, Request
from sqlalchemy.orm import Session

from escola_futebol import auth, database
from escola_futebol.models.usuario import Usuario
from escola_futebol.schemas import usuario as schemas_usuario


router = APIRouter(
    prefix="/api",
    tags=["Authentication"]
)


@router.post("/login", response_model=schemas_usuario.Token)
async def login(credenciais: schemas_usuario.LoginRequest, request: Request, db: Session = Depends(database.get_db)):
    user = auth.authenticate_user(db, credenciais.email, credenciais.senha)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Email ou senha inválidos",
            headers={"WWW-Authenticate": "Bearer"},
        )

    # Sessão do navegador; o token serve para os demais clientes
    request.session.clear()
    request.session["usuario_email"] = user.email

    access_token = auth.create_access_token(
        data={"sub": user.email, "role": user.role, "tipo": "admin"}
    )
    user_info = schemas_usuario.UsuarioRead.model_validate(user)
    return {"access_token": access_token, "token_type": "bearer", "user_info": user_info}


@router.post("/logout")
async def logout(request: Request):
    request.session.clear()
    return {"mensagem": "Logout realizado com sucesso"}


@router.get("/auth/user", response_model=schemas_usuario.UsuarioRead)
async def read_users_me(current_user: Usuario = Depends(auth.get_current_active_user)):
    """
    Retorna os dados do usuário atualmente logado.
    """
    return current_user
