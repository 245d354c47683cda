from html import escape


def feedback_email_subject(level) -> str:
    return f"Quiz Feedback: {level or 'General'}"


def feedback_email_body(username, level, rating, feedback: str | None):
    username = escape(username or "Anonymous")
    level = escape(str(level or "General"))
    rating = escape(str(rating)) if rating else "No rating provided"
    feedback = escape(feedback) if feedback else "(No message provided, only rating)"

    return f"""
    <!DOCTYPE html>
    <html lang="en">
    <head>
        <meta charset="UTF-8" />
        <meta name="viewport" content="width=device-width, initial-scale=1" />
        <style>
            body {{
                background-color: #f9f9f9;
                font-family: 'Segoe UI', Tahoma, Geneva, Verdana, sans-serif;
                padding: 16px;
                margin: 0;
            }}
            .container {{
                max-width: 560px;
                margin: auto;
                background-color: #ffffff;
                border-radius: 12px;
                padding: 24px;
            }}
            h2 {{
                color: #FFD700;
                margin-bottom: 16px;
            }}
            .message {{
                background-color: #fff;
                padding: 12px;
                border-radius: 8px;
                border: 1px solid #eee;
            }}
            .footer {{
                font-size: 12px;
                color: #555;
                margin-top: 32px;
            }}
        </style>
    </head>
    <body>
        <div class="container">
            <h2>New Feedback Received</h2>
            <p><strong>User:</strong> {username}</p>
            <p><strong>Level:</strong> {level}</p>
            <p><strong>Rating:</strong> {rating}</p>
            <h3>Feedback Message:</h3>
            <p class="message">{feedback}</p>
            <div class="footer">Billions Quiz Arena</div>
        </div>
    </body>
    </html>
    """
