from relauncher.serve import run

run()
