"""Counter storage backends for push statistics."""