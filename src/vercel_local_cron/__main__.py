from vercel_local_cron.cli import app

app()
