from fastapi.responses import HTMLResponse

LOGIN_PAGE = """<!doctype html>
<html>
  <head><title>Sign in</title></head>
  <body>
    <form method="post" action="/login">
      <input name="email" type="email" required>
      <input name="password" type="password" required>
      <button type="submit">Sign in</button>
    </form>
  </body>
</html>
"""


async def login_page():
    return HTMLResponse(LOGIN_PAGE)
