from vault_query import run_server

run_server()
