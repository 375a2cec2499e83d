"""
Obras ERP - CLI
Ferramenta de linha de comando para consultar obras pela API

Uso:
    python obras_cli.py login
    python obras_cli.py obras list
    python obras_cli.py obras relatorio <obra_id>
    python obras_cli.py alertas <obra_id>
    python obras_cli.py atrasados
"""
import sys
import asyncio
import httpx
from pathlib import Path

BASE_URL = "http://localhost:3001"
TOKEN_FILE = Path(".obras_token")


def save_token(token: str):
    TOKEN_FILE.write_text(token)


def load_token() -> str:
    if TOKEN_FILE.exists():
        return TOKEN_FILE.read_text().strip()
    return None


def get_headers():
    token = load_token()
    if not token:
        print("Erro: Faça login primeiro com 'python obras_cli.py login'")
        sys.exit(1)
    return {"Authorization": f"Bearer {token}"}


def cmd_login():
    """Login no sistema"""
    email = input("Email: ").strip()
    password = input("Senha: ").strip()

    try:
        response = httpx.post(
            f"{BASE_URL}/auth/login",
            json={"email": email, "password": password}
        )
        if response.status_code == 200:
            data = response.json()
            save_token(data["token"])
            print(f"\n✓ Login bem sucedido!")
            print(f"  Usuário: {data['user']['email']}")
        else:
            print(f"✗ Erro: {response.json().get('error', 'Falha no login')}")
    except httpx.HTTPError as e:
        print(f"✗ Erro de conexão: {e}")


def cmd_obras_list():
    """Lista obras da empresa"""
    try:
        response = httpx.get(f"{BASE_URL}/api/obras", headers=get_headers())
        if response.status_code == 200:
            obras = response.json()
            print(f"\n{'='*80}")
            print(f"{'ID':<36} | {'Nome':<20} | {'Status':<12} | {'Progresso':>9}")
            print(f"{'='*80}")
            for o in obras:
                print(f"{o['id']:<36} | {o['name'][:20]:<20} | {o['status']:<12} | {o['progress']:>8}%")
            print(f"\nTotal: {len(obras)} obras")
        else:
            print(f"✗ Erro: {response.text}")
    except httpx.HTTPError as e:
        print(f"✗ Erro: {e}")


def cmd_obras_relatorio(obra_id: str):
    """Relatorio gerencial de uma obra"""
    try:
        response = httpx.get(
            f"{BASE_URL}/api/relatorio-gerencial",
            params={"obraId": obra_id},
            headers=get_headers()
        )
        if response.status_code == 200:
            r = response.json()
            print(f"\n{'='*50}")
            print(f"  {r['obra_nome']} ({r['status_geral']})")
            print(f"{'='*50}")
            print(f"  Progresso físico:     {r['progresso_fisico']}%")
            print(f"  Progresso financeiro: {r['progresso_financeiro']}%")
            print(f"  Orçado:    R$ {r['total_orcado']:.2f}")
            print(f"  Pago:      R$ {r['total_pago']:.2f}")
            print(f"  Pendente:  R$ {r['total_pendente']:.2f}")
            print(f"  Desvio:    {r['desvio_percent']}% ({r['classificacao_desvio']})")
            print(f"  Risco de fluxo: {r['risco_financeiro']}")
            print(f"  Etapas atrasadas: {r['etapas_atrasadas']} de {r['total_etapas']}")
            print(f"  Alertas: {r['total_alertas']} (críticos: {r['alertas_criticos']})")
            print(f"{'='*50}")
        else:
            print(f"✗ Erro: {response.json().get('error', response.text)}")
    except httpx.HTTPError as e:
        print(f"✗ Erro: {e}")


def cmd_alertas(obra_id: str):
    """Alertas da obra"""
    try:
        response = httpx.get(
            f"{BASE_URL}/api/alertas",
            params={"obraId": obra_id},
            headers=get_headers()
        )
        if response.status_code == 200:
            alertas = response.json()
            for a in alertas:
                print(f"[{a['severidade'].upper():<8}] {a['titulo']}")
                print(f"           {a['descricao']}")
            print(f"\nTotal: {len(alertas)} alertas")
        else:
            print(f"✗ Erro: {response.text}")
    except httpx.HTTPError as e:
        print(f"✗ Erro: {e}")


def cmd_atrasados():
    """Marca lancamentos vencidos como Atrasado em todas as empresas (acesso direto ao banco)"""
    from app.core.overdue_scheduler import run_once

    changed = asyncio.run(run_once())
    print(f"✓ {changed} lançamento(s) marcados como atrasados")


def print_help():
    print("""
Obras ERP - CLI
===============

Comandos disponíveis:

  python obras_cli.py login                     - Fazer login
  python obras_cli.py obras list                - Listar obras
  python obras_cli.py obras relatorio <id>      - Relatório gerencial da obra
  python obras_cli.py alertas <obra_id>         - Alertas da obra
  python obras_cli.py atrasados                 - Atualizar lançamentos vencidos
""")


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print_help()
        sys.exit(0)

    cmd = sys.argv[1].lower()

    if cmd == "login":
        cmd_login()
    elif cmd == "obras":
        if len(sys.argv) < 3:
            print("Uso: obras [list|relatorio]")
        elif sys.argv[2] == "list":
            cmd_obras_list()
        elif sys.argv[2] == "relatorio" and len(sys.argv) >= 4:
            cmd_obras_relatorio(sys.argv[3])
        else:
            print("Uso: obras relatorio <obra_id>")
    elif cmd == "alertas" and len(sys.argv) >= 3:
        cmd_alertas(sys.argv[2])
    elif cmd == "atrasados":
        cmd_atrasados()
    elif cmd == "help":
        print_help()
    else:
        print(f"Comando desconhecido: {cmd}")
        print_help()
